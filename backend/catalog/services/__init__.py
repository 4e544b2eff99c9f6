"""
Product Catalog Backend: Services Layer
=======================================

Service Inventory:
    - ProductService: the parameter-bound statements against `products`
      and the translation of driver faults into application exceptions.
"""
