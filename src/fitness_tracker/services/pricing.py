"""Cart pricing with product discounts and points redemption.

Prices are integer cents. The product discount is applied first and rounded
to the nearest cent; an eligible points discount is then applied to that
already-discounted price and rounded again. The two percentages never add.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass

from fitness_tracker.domain.shop import CartLine, CartTotal, LinePrice, Product
from fitness_tracker.errors import InvalidInput, InvalidQuantity, NotFound
from fitness_tracker.services.catalog import ProductCatalogService
from fitness_tracker.services.store import Record, RecordStore
from fitness_tracker.services.users import UserService

_logger = logging.getLogger(__name__)


def discounted_price(price_cents: int, percent: int) -> int:
    """Return price reduced by percent, rounded half-up to whole cents."""
    if price_cents < 0:
        raise InvalidInput("Price must not be negative")
    if not 0 <= percent <= 100:
        raise InvalidInput("Discount percent must be between 0 and 100")
    return (price_cents * (100 - percent) + 50) // 100


def points_eligible(product: Product, use_points: bool, points_balance: int) -> bool:
    """Return True when a points discount applies to the product."""
    return use_points and points_balance >= product.points_to_redeem


def unit_price(product: Product, use_points: bool, points_balance: int) -> int:
    """Return the unit price in cents after all applicable discounts."""
    after_discount = discounted_price(product.price_cents, product.discount_percent)
    if points_eligible(product, use_points, points_balance):
        return discounted_price(after_discount, product.points_discount_percent)
    return after_discount


def price_line(line: CartLine, product: Product, points_balance: int) -> LinePrice:
    """Price a cart line; an ineligible points request is priced without points."""
    if line.quantity <= 0:
        raise InvalidQuantity("Quantity must be a positive integer")
    applied = points_eligible(product, line.use_points, points_balance)
    price = unit_price(product, line.use_points, points_balance)
    return LinePrice(
        line=line,
        product=product,
        unit_price_cents=price,
        line_total_cents=price * line.quantity,
        points_applied=applied,
        points_used=product.points_to_redeem * line.quantity if applied else 0,
    )


def cart_total(
    lines: list[CartLine], products: Mapping[int, Product], points_balance: int
) -> CartTotal:
    """Sum line totals and the points redeemed by eligible lines."""
    priced = []
    for line in lines:
        product = products.get(line.product_id)
        if product is None:
            raise NotFound(f"Product {line.product_id} not found")
        priced.append(price_line(line, product, points_balance))
    return _summed(priced)


def settle_cart(
    lines: list[CartLine], products: Mapping[int, Product], points_balance: int
) -> CartTotal:
    """Price lines in order against a balance that each redemption draws down.

    A line whose points would exceed what is left is priced without points,
    so the total never redeems more than the balance.
    """
    remaining = points_balance
    priced = []
    for line in lines:
        product = products.get(line.product_id)
        if product is None:
            raise NotFound(f"Product {line.product_id} not found")
        item = price_line(line, product, remaining)
        if item.points_used > remaining:
            item = price_line(line, product, 0)
        remaining -= item.points_used
        priced.append(item)
    return _summed(priced)


def format_cents(cents: int) -> str:
    """Render cents as a decimal amount, e.g. 7200 -> '72.00'."""
    sign = "-" if cents < 0 else ""
    whole, fraction = divmod(abs(cents), 100)
    return f"{sign}{whole}.{fraction:02d}"


@dataclass
class CartService:
    """Application service for cart lines and checkout."""

    repository: RecordStore
    products: ProductCatalogService
    users: UserService

    def add_to_cart(
        self, user_id: int, product_id: int, quantity: int, use_points: bool
    ) -> CartLine:
        """Add a product; an existing line for it is merged.

        Quantities are summed and ``use_points`` takes the latest request.
        """
        _validate_quantity(quantity)
        self.users.get_user(user_id)
        self.products.get_product(product_id)

        def merge(existing: Record) -> Record:
            return {
                "quantity": int(existing["quantity"]) + quantity,
                "use_points": use_points,
            }

        record = self.repository.merge_or_create(
            {"user_id": user_id, "product_id": product_id},
            {
                "user_id": user_id,
                "product_id": product_id,
                "quantity": quantity,
                "use_points": use_points,
            },
            merge,
        )
        return _parse_line(record)

    def update_line(
        self, line_id: int, quantity: int, use_points: bool = False
    ) -> CartLine:
        """Replace a line's quantity and points flag."""
        _validate_quantity(quantity)
        record = self.repository.update(
            line_id, {"quantity": quantity, "use_points": use_points}
        )
        if record is None:
            raise NotFound(f"Cart item {line_id} not found")
        return _parse_line(record)

    def remove_line(self, line_id: int) -> bool:
        return self.repository.delete(line_id)

    def clear_cart(self, user_id: int) -> int:
        return self.repository.delete_where({"user_id": user_id})

    def list_lines(self, user_id: int) -> list[CartLine]:
        return [
            _parse_line(row) for row in self.repository.find({"user_id": user_id})
        ]

    def get_cart(self, user_id: int) -> CartTotal:
        """Price the user's cart against their current points balance."""
        user = self.users.get_user(user_id)
        lines = self.list_lines(user_id)
        return cart_total(lines, self._products_for(lines), user.points)

    def checkout(self, user_id: int) -> CartTotal:
        """Redeem the cart's points, empty it and return the priced total.

        Lines are settled against a running balance, so a cart whose lines
        each fit the balance but together exceed it still checks out; the
        lines that no longer fit pay full price.
        """
        user = self.users.get_user(user_id)
        lines = self.list_lines(user_id)
        total = settle_cart(lines, self._products_for(lines), user.points)
        if not total.lines:
            raise InvalidInput("Cart is empty")
        if total.points_used:
            self.users.redeem_points(user_id, total.points_used)
        self.clear_cart(user_id)
        _logger.info(
            "Checkout for user %s: subtotal=%s points_used=%s",
            user_id,
            format_cents(total.subtotal_cents),
            total.points_used,
        )
        return total

    def _products_for(self, lines: list[CartLine]) -> dict[int, Product]:
        return {
            product_id: self.products.get_product(product_id)
            for product_id in {line.product_id for line in lines}
        }


def _summed(priced: list[LinePrice]) -> CartTotal:
    return CartTotal(
        subtotal_cents=sum(item.line_total_cents for item in priced),
        points_used=sum(item.points_used for item in priced),
        lines=priced,
    )

def _validate_quantity(quantity: int) -> None:
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
        raise InvalidQuantity("Quantity must be a positive integer")


def _parse_line(row: Record) -> CartLine:
    """Parse a cart row into a domain model."""
    return CartLine(
        id=int(row["id"]),
        user_id=int(row["user_id"]),
        product_id=int(row["product_id"]),
        quantity=int(row["quantity"]),
        use_points=bool(row.get("use_points", False)),
    )
