"""
Critic vs. audience score analysis of the Rotten Tomatoes movie export.
"""
