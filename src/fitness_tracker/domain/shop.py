"""Storefront domain models. Money is held in integer cents."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    """A product that can be bought with optional points redemption."""

    id: int
    name: str
    description: str
    price_cents: int
    category: str
    discount_percent: int = 0
    points_to_redeem: int = 0
    points_discount_percent: int = 0
    is_bestseller: bool = False
    image_ref: str | None = None


@dataclass(frozen=True)
class CartLine:
    """A product in a user's cart."""

    id: int
    user_id: int
    product_id: int
    quantity: int
    use_points: bool


@dataclass(frozen=True)
class LinePrice:
    """Priced view of a cart line."""

    line: CartLine
    product: Product
    unit_price_cents: int
    line_total_cents: int
    points_applied: bool
    points_used: int


@dataclass(frozen=True)
class CartTotal:
    """Priced cart."""

    subtotal_cents: int
    points_used: int
    lines: list[LinePrice]
