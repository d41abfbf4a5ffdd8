"""
Service layer abstraction.

``ProductService`` encapsulates the business logic behind each
endpoint.  The query engine and the payload validation are plain
functions so they can be tested without an application.
"""
