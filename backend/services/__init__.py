"""
Services package - Business logic layer.

This package contains all business logic services that operate on Django models
but are decoupled from the HTTP/WebSocket layer.

Modules:
    - matching: Route scoring and taxi search
    - proximity: Driver/passenger proximity alerts and the periodic sweep
    - notifications: Debounced notification emission and push
    - ride_management: Core ride lifecycle operations
"""
