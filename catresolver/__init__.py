"""Category resolver service.

Resolves department/category/subcategory paths to search backend
category IDs.
"""
