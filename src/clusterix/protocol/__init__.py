"""
The text protocol spoken by DX cluster servers: chunked reading of the raw stream, the prompt driven
login and the extraction of spots from the received text.
"""
