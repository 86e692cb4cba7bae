# Services package init
"""
Inkwell Backend - Services Layer
==================================

Business logic between routes (HTTP) and models (persistence).

Service Inventory:
    - UserService: registration, login, username lookup
    - PostService: blog post CRUD with author resolution

Services are stateless; each call receives the request's AsyncSession.
"""
