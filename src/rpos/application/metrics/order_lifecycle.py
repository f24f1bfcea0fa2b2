from __future__ import annotations

from prometheus_client import Counter

from rpos.domain.order.entities import Order

ORDERS_TOTAL = Counter(
    "rpos_orders_total",
    "Total number of orders placed by initial status.",
    ["status"],
)

ORDER_ITEMS_REJECTED_TOTAL = Counter(
    "rpos_order_items_rejected_total",
    "Total number of requested order lines dropped because the menu item does not exist.",
)

ORDER_PLACEMENT_FAILURES_TOTAL = Counter(
    "rpos_order_placement_failures_total",
    "Total number of failed order placements.",
    ["reason"],
)

MENU_MUTATIONS_TOTAL = Counter(
    "rpos_menu_mutations_total",
    "Total number of menu item mutations.",
    ["operation"],
)


def record_order_placed(order: Order) -> None:
    ORDERS_TOTAL.labels(status=order.status.value).inc()


def record_items_rejected(count: int) -> None:
    if count > 0:
        ORDER_ITEMS_REJECTED_TOTAL.inc(count)


def record_placement_failure(reason: str) -> None:
    ORDER_PLACEMENT_FAILURES_TOTAL.labels(reason=reason).inc()


def record_menu_mutation(operation: str) -> None:
    MENU_MUTATIONS_TOTAL.labels(operation=operation).inc()
