"""FastAPI routes for products, proxied to the FakeStore catalog."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status
from pydantic import (
    AnyUrl,
    BaseModel,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from demo_app.api.dependencies import get_fakestore_api
from demo_app.models.product import AddProductCommand, Product, UpdateProductCommand
from demo_app.models.task import MAX_ID
from demo_app.services.fakestore import FakeStoreAPI

router = APIRouter(prefix="/products", tags=["products"])

FakeStoreDep = Annotated[FakeStoreAPI, Depends(get_fakestore_api)]
ProductId = Annotated[
    int, Path(ge=0, le=MAX_ID, description="Catalog product id")
]

_url_adapter = TypeAdapter(AnyUrl)


class ProductRequest(BaseModel):
    """Request body for creating or replacing a product."""

    title: str = Field(min_length=1, description="Product title")
    price: float = Field(
        default=0.0, ge=0, allow_inf_nan=False, description="Unit price"
    )
    description: str = Field(default="", description="Free-form description")
    category: str = Field(default="", description="Catalog category")
    image: str = Field(min_length=1, description="Image URL")

    @field_validator("title", "category", mode="before")
    @classmethod
    def strip_whitespace(cls, value: object) -> object:
        """Trim title and category before length checks."""
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("image")
    @classmethod
    def validate_image_url(cls, value: str) -> str:
        """Require a URL but keep the string exactly as sent."""
        try:
            _url_adapter.validate_python(value)
        except ValidationError as e:
            raise ValueError("image must be a valid URL") from e
        return value


@router.get("", response_model=list[Product])
async def get_products(api: FakeStoreDep) -> list[Product]:
    """List every product in the catalog."""
    return await api.get_products()


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED)
async def add_product(body: ProductRequest, api: FakeStoreDep) -> Product:
    """Create a product.

    Raises:
        CommandValidationError: 400 if the fields break a product invariant.
    """
    command = AddProductCommand(
        title=body.title,
        price=body.price,
        description=body.description,
        category=body.category,
        image=body.image,
    )
    return await api.add_product(command)


@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: ProductId, api: FakeStoreDep) -> Product:
    """Fetch a single product.

    Raises:
        ResourceNotFoundError: 404 if the catalog has no such product.
    """
    return await api.get_product(product_id)


@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: ProductId,
    body: ProductRequest,
    api: FakeStoreDep,
) -> Product:
    """Replace a product.

    Raises:
        CommandValidationError: 400 if the fields break a product invariant.
        ResourceNotFoundError: 404 if the catalog has no such product.
    """
    command = UpdateProductCommand(
        id=product_id,
        title=body.title,
        price=body.price,
        description=body.description,
        category=body.category,
        image=body.image,
    )
    return await api.update_product(command)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_product(product_id: ProductId, api: FakeStoreDep) -> Response:
    """Delete a product.

    Raises:
        ResourceNotFoundError: 404 if the catalog has no such product.
    """
    await api.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
