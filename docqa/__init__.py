"""
Company document question answering: retrieval, reranking and answer assembly.
"""

__version__ = "0.1.0"
