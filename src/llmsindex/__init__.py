"""
llmsindex - Generates llms.txt and llms-full.txt indexes for a documentation repository.
"""

__version__ = "0.1.0"
