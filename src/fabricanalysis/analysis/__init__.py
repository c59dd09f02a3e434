"""
The ANALYSIS layer derives statistics and density contours from sets of
direction cosines. It builds on the CORE layer and is pure NumPy.
"""
