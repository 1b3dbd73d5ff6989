"""
Kernel layer.

`src/kernels/python/` holds the integer-only arithmetic kernels the curve core
is built on. They know nothing about ranges or fees.
"""
