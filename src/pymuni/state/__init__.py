"""State layer.

Pure functions and small owners that turn one feed batch into the
filtered record sequence, the route summary and the drawn marker set.
Nothing here performs I/O.
"""
