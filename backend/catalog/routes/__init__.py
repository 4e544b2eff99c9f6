"""
Product Catalog Backend: API Routes Package
===========================================

Route Inventory:
    - products.py:  GET    /product    (read one by id)
                    GET    /products   (filtered search)
                    PUT    /product    (full replace by id)
                    DELETE /product    (delete by id)
    - health.py:    GET    /health     (service health check)

Routes parse HTTP input and pick status codes; statements live in services.
"""
