"""
The conduit package provides an abstraction of a bi-directional byte stream to a specified endpoint.
The concrete implementation is a TCP socket.
"""
