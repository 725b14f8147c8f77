"""
JE's Palace Shoes Django project package
"""
