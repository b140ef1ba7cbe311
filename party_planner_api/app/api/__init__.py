"""
API package containing versioned routes.

A version subpackage exposes the public ``router`` and the back office
``admin_router``; ``deps`` holds the helpers shared by the route
modules.
"""
