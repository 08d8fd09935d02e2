"""
Canteen Signal Handlers.

Default handlers only record the events in the log. Projects connect
their own receivers for anything else.

This module is imported in apps.py to register handlers.
"""

import logging

from django.dispatch import receiver

from canteen.signals import menu_submitted, purchase_order_confirmed, purchase_order_created

logger = logging.getLogger(__name__)


@receiver(menu_submitted)
def log_menu_submitted(sender, menu, user=None, **kwargs):
    """Menu now counts toward the procurement totals of its date."""
    logger.info(
        f"Menu {menu.pk} for {menu.date} is now part of procurement",
        extra={
            "menu": menu.pk,
            "menu_date": str(menu.date),
            "canteen": menu.canteen,
            "meal": menu.meal,
        },
    )


@receiver(purchase_order_created)
def log_purchase_order_created(sender, order, user=None, **kwargs):
    logger.info(
        f"PurchaseOrder {order.code} created for {order.target_date}",
        extra={
            "purchase_order": order.code,
            "target_date": str(order.target_date),
            "supplier": order.supplier_id,
        },
    )


@receiver(purchase_order_confirmed)
def log_purchase_order_confirmed(sender, order, user=None, **kwargs):
    logger.info(
        f"PurchaseOrder {order.code} confirmed with supplier {order.supplier_id}",
        extra={
            "purchase_order": order.code,
            "target_date": str(order.target_date),
        },
    )
