"""
SMS Messaging Engine

Dispatches outbound SMS requests to the government SMS gateways:
- Routes OTP/transactional traffic synchronously to a vendor gateway
- Hands promotional/bulk traffic off to a Redis Stream
- Normalizes vendor text responses into outcomes
- Reconciles outcomes against the stored request

The engine depends only on basecore for settings, logging, database and Redis access.
"""
