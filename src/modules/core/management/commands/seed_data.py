from __future__ import annotations

import random

from django.core.management.base import BaseCommand

from modules.core.exceptions import InvalidRequest
from modules.orders.constants import OrderStatus
from modules.orders.dtos import CreateOrderDTO, CreateOrderItemDTO
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.users.models import User
from modules.users.repositories.django_repository import UserDjangoRepository

SEED_ORDER_PREFIX = "seed-order-"


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=30,
            help="Number of orders to create (default: 30).",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        users = self._seed_users()
        products = self._seed_products()
        orders_created = self._seed_orders(users, products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"users={len(users)}, "
                f"products={len(products)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_users(self) -> list[User]:
        self.stdout.write("Creating users...")
        users: list[User] = []
        seed_users = [
            ("ana@example.com", 50_000),
            ("bruno@example.com", 20_000),
            ("carla@example.com", 5_000),
            ("daniel@example.com", 1_000),
            ("eduardo@example.com", 0),
        ]
        for email, balance in seed_users:
            user, _ = User.objects.get_or_create(
                email=email, defaults={"balance": balance}
            )
            users.append(user)
        self.stdout.write(self.style.SUCCESS("Creating users... Done!"))
        return users

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        catalog = [
            ('Monitor 27"', 1299),
            ("Mechanical Keyboard", 399),
            ("Gaming Mouse", 249),
            ("Headset", 299),
            ("Office Desk", 899),
            ("Ergonomic Chair", 1499),
            ("A4 Paper", 29),
            ("Blue Pen", 4),
            ("Notebook", 19),
            ("Calculator", 89),
        ]
        for name, price in catalog:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={"price": price, "stock": random.randint(10, 200)},
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_orders(
        self, users: list[User], products: list[Product], count: int
    ) -> int:
        self.stdout.write("Creating orders...")
        if not users or not products:
            self.stdout.write(
                self.style.WARNING("Skipping orders (no users/products).")
            )
            return 0

        service = OrderService(
            order_repository=OrderDjangoRepository(),
            user_repository=UserDjangoRepository(),
            product_repository=ProductDjangoRepository(),
        )
        target_statuses = [OrderStatus.CREATED, OrderStatus.PAID, OrderStatus.SHIPPED]

        orders_created = 0
        for i in range(count):
            key = f"{SEED_ORDER_PREFIX}{i + 1}"
            if Order.objects.filter(idempotency_key=key).exists():
                continue

            picked = random.sample(products, k=random.randint(1, min(3, len(products))))
            dto = CreateOrderDTO(
                user_id=random.choice(users).id,
                items=[
                    CreateOrderItemDTO(product_id=p.id, quantity=random.randint(1, 3))
                    for p in picked
                ],
                notes=f"Seed order {i + 1}",
                idempotency_key=key,
            )
            try:
                order = service.create_order(dto)
            except InvalidRequest as exc:
                self.stdout.write(self.style.WARNING(f"Skipped order {i + 1}: {exc}"))
                continue
            orders_created += 1

            target = random.choice(target_statuses)
            try:
                if target in (OrderStatus.PAID, OrderStatus.SHIPPED):
                    order = service.update_status(order.id, OrderStatus.PAID)
                if target == OrderStatus.SHIPPED:
                    service.update_status(order.id, OrderStatus.SHIPPED)
            except InvalidRequest as exc:
                self.stdout.write(
                    self.style.WARNING(
                        f"Order {order.id} left as {order.status}: {exc}"
                    )
                )

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return orders_created
