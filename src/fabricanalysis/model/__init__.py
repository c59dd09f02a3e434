"""
The MODEL layer contains the result records, attitude text parsing and the
analysis state container. It has no knowledge of plotting.
"""
