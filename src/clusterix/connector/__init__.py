"""
A connector knows how to reach an endpoint and open a conduit to it.

A connector can be thought of as a conduit factory: the client asks it for a fresh conduit each
time it (re)connects.
"""
