"""
Realtime app for WebSocket communication.

This app provides:
- The notification consumer every signed-in client connects to
- The push transport that services use to reach a user's sockets
- JWT authentication middleware for WebSocket connections

Usage:
    from realtime.notifications import push_to_user
"""
