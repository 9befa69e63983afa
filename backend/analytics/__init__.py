"""
In-process usage analytics for searches and rejections.
"""
