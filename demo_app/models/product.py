"""Product schema and the commands used to create or modify products.

Products live entirely in the FakeStore catalog. The process keeps no copy;
it only validates input into immutable commands and decodes what the
catalog sends back.
"""

from dataclasses import dataclass

from pydantic import BaseModel, Field

from demo_app.errors import CommandValidationError


class ProductRating(BaseModel):
    """Customer rating, populated by the catalog only."""

    rate: float = 0.0
    count: int = Field(default=0, ge=0)


class Product(BaseModel):
    """Product as exposed by the FakeStore catalog.

    Attributes:
        id: Catalog-assigned identifier
        title: Product title
        price: Unit price
        description: Free-form description
        category: Catalog category (e.g., 'electronics')
        image: Image URL
        rating: Rating summary, zeroed for products created locally
    """

    id: int = Field(default=0, ge=0)
    title: str = ""
    price: float = 0.0
    description: str = ""
    category: str = ""
    image: str = ""
    rating: ProductRating = Field(default_factory=ProductRating)


def _validate_product_fields(title: str, price: float, category: str) -> None:
    """Check product field invariants in precedence order.

    Raises:
        CommandValidationError: On the first violated rule.
    """
    if not title:
        raise CommandValidationError("title must not be empty")
    if price < 0:
        raise CommandValidationError("price must not be negative")
    if not category:
        raise CommandValidationError("undefined category")


@dataclass(frozen=True)
class AddProductCommand:
    """Validated input for creating a new product.

    Title and category are trimmed on construction. The catalog itself
    accepts anything, so these rules are enforced locally.

    Raises:
        CommandValidationError: If title is blank, price is negative or
            category is blank (checked in that order).
    """

    title: str
    price: float
    description: str
    category: str
    image: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", self.title.strip())
        object.__setattr__(self, "category", self.category.strip())
        _validate_product_fields(self.title, self.price, self.category)

    def to_payload(self) -> dict[str, str | float]:
        """Return the JSON body sent to the catalog."""
        return {
            "title": self.title,
            "price": self.price,
            "description": self.description,
            "category": self.category,
            "image": self.image,
        }


@dataclass(frozen=True)
class UpdateProductCommand:
    """Validated input for replacing an existing product.

    Same rules as AddProductCommand, plus the id of the target product.
    """

    id: int
    title: str
    price: float
    description: str
    category: str
    image: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "title", self.title.strip())
        object.__setattr__(self, "category", self.category.strip())
        _validate_product_fields(self.title, self.price, self.category)

    def to_payload(self) -> dict[str, str | float]:
        """Return the JSON body sent to the catalog (the id goes in the path)."""
        return {
            "title": self.title,
            "price": self.price,
            "description": self.description,
            "category": self.category,
            "image": self.image,
        }
