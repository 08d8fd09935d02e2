"""
Canteen Signals.

Communication with external systems (notifications, ERP export...)
happens via signals.

Signals:
    menu_submitted: Menu locked and now counted toward procurement
    purchase_order_created: New draft purchase order
    purchase_order_confirmed: Purchase order confirmed with the supplier
"""

from django.dispatch import Signal

# Menu submitted
# Sent by Menu.submit()
# Args: menu, user
menu_submitted = Signal()

# Purchase order created
# Sent by services.procurement.create_purchase_order()
# Args: order, user
purchase_order_created = Signal()

# Purchase order confirmed
# Sent by PurchaseOrder.confirm()
# Args: order, user
purchase_order_confirmed = Signal()

__all__ = ["menu_submitted", "purchase_order_created", "purchase_order_confirmed"]
