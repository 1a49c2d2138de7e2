"""
recentfiles: find, list and open the most recently modified files in a tree.
"""
