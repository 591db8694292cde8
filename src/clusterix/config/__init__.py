"""
Client options, read from configuration files with ConfigObj and validated against a schema.

Files are layered: the user's ~/.clusterix.cfg, then an explicitly given file, then values given
on the command line.
"""
