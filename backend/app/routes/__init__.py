# Routes package init
"""
Inkwell Backend - API Routes Package
======================================

Route Inventory:
    - health.py:  GET  /                     (greeting)
                  GET  /health               (service health check)
    - auth.py:    POST /api/register         (create user)
                  POST /api/login            (check credentials)
    - posts.py:   POST /api/posts            (create post)
                  GET  /api/blogs            (list posts)
                  GET/PUT/DELETE /api/blog/{id}

Routes stay thin: parse the request, call a service, shape the response.
"""
