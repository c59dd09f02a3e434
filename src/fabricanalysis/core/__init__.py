"""
The CORE layer contains the fixed-size linear algebra and orientation geometry.
It is pure NumPy: no state, no plotting.
"""
