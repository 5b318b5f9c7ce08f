"""Not-found errors raised at the catalog boundary."""

__all__ = ["CategoryNotFoundError", "ProductNotFoundError"]


class CategoryNotFoundError(LookupError):
    """Raised when a category has no content."""

    def __init__(self, category: str, available=None):
        self.category = category
        self.available = list(available or [])
        message = f"Category not found: {category}"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)


class ProductNotFoundError(LookupError):
    """Raised when a slug does not exist within a category."""

    def __init__(self, category: str, slug: str):
        self.category = category
        self.slug = slug
        super().__init__(f"Product not found: {category}/{slug}")
