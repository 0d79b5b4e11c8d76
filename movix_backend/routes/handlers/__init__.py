"""
Route handlers.
"""
from .files import register_file_routes
from .folder import register_folder_routes
from .pages import register_page_routes
from .search import register_search_routes

__all__ = [
    "register_file_routes",
    "register_folder_routes",
    "register_page_routes",
    "register_search_routes",
]
