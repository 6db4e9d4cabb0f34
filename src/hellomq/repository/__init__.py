"""
Repository package for broker access.

`rabbitmq` holds the connection manager and the queue publisher/subscriber;
`message` holds the broker-agnostic interfaces and the services built on them.
"""
