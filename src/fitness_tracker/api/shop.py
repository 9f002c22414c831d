"""Product and cart endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status

from fitness_tracker.api.schemas import (
    CartItemRequest,
    CartItemResponse,
    CartItemUpdateRequest,
    CartResponse,
    ProductResponse,
)
from fitness_tracker.domain.shop import CartLine
from fitness_tracker.errors import NotFound

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(prefix="/api", tags=["shop"])


def _line_response(line: CartLine) -> CartItemResponse:
    return CartItemResponse(
        id=line.id,
        user_id=line.user_id,
        product_id=line.product_id,
        quantity=line.quantity,
        use_points=line.use_points,
    )


@router.get("/products")
async def list_products(
    request: Request, category: str | None = None
) -> list[ProductResponse]:
    container: AppContainer = request.app.state.container
    return [
        ProductResponse.from_domain(product)
        for product in container.product_service.list_products(category)
    ]


@router.get("/products/{product_id}")
async def get_product(product_id: int, request: Request) -> ProductResponse:
    container: AppContainer = request.app.state.container
    return ProductResponse.from_domain(
        container.product_service.get_product(product_id)
    )


@router.get("/cart/{user_id}")
async def get_cart(user_id: int, request: Request) -> CartResponse:
    """Return the user's cart priced against their points balance."""
    container: AppContainer = request.app.state.container
    return CartResponse.from_domain(container.cart_service.get_cart(user_id))


@router.post("/cart", status_code=status.HTTP_201_CREATED)
async def add_to_cart(payload: CartItemRequest, request: Request) -> CartItemResponse:
    """Add a product to the cart, merging with an existing line."""
    container: AppContainer = request.app.state.container
    line = container.cart_service.add_to_cart(
        payload.user_id, payload.product_id, payload.quantity, payload.use_points
    )
    return _line_response(line)


@router.put("/cart/{line_id}")
async def update_cart_item(
    line_id: int, payload: CartItemUpdateRequest, request: Request
) -> CartItemResponse:
    container: AppContainer = request.app.state.container
    line = container.cart_service.update_line(
        line_id, payload.quantity, payload.use_points
    )
    return _line_response(line)


@router.delete("/cart/{line_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_cart_item(line_id: int, request: Request) -> Response:
    container: AppContainer = request.app.state.container
    if not container.cart_service.remove_line(line_id):
        raise NotFound(f"Cart item {line_id} not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/cart/user/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(user_id: int, request: Request) -> Response:
    """Remove every line from the user's cart."""
    container: AppContainer = request.app.state.container
    container.cart_service.clear_cart(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/cart/user/{user_id}/checkout")
async def checkout(user_id: int, request: Request) -> CartResponse:
    """Redeem points for the cart and empty it."""
    container: AppContainer = request.app.state.container
    return CartResponse.from_domain(container.cart_service.checkout(user_id))
