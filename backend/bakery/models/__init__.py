from .auth import User, ROLES, ROLE_STUDENT, ROLE_ADMIN
from .catalog import Product
from .orders import Order, OrderItem, ORDER_STATUSES, PAYMENT_METHODS

__all__ = [
    'User', 'ROLES', 'ROLE_STUDENT', 'ROLE_ADMIN',
    'Product',
    'Order', 'OrderItem', 'ORDER_STATUSES', 'PAYMENT_METHODS',
]
