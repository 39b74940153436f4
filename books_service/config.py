"""
Books service configuration
"""

from shared.utils.config import ServiceSettings


class BooksSettings(ServiceSettings):
    """Catalog service settings"""

    service_name: str = "books-service"
    books_port: int = 3001
