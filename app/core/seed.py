"""
Demo data loaded at startup

Users, plans, discount codes and past transactions the storefront
shows before anyone signs in.
"""
import logging
from datetime import date

from .domain.billing import DiscountCode, PricingPlan, Transaction
from .domain.user import User
from .repositories.billing_repo import DiscountCodeRepository, PlanRepository, TransactionRepository
from .repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


def demo_users():
    return [
        User("user_1", "vana@example.com", "Nguyễn Văn A", "https://i.pravatar.cc/150?u=user1", 12000, False, date(2024, 3, 10)),
        User("user_2", "thib@example.com", "Trần Thị B", "https://i.pravatar.cc/150?u=user2", 75000, False, date(2024, 1, 22)),
        User("user_3", "hoangc@example.com", "Lê Hoàng C", "https://i.pravatar.cc/150?u=user3", 0, False, date(2024, 6, 1)),
        User("user_4", "minhd@example.com", "Phạm Minh D", "https://i.pravatar.cc/150?u=user4", 500000, False, date(2023, 11, 5)),
        User("user01", "user@example.com", "Người Dùng", "https://i.pravatar.cc/150?u=user", 50000, False, date(2024, 5, 20)),
        User("admin01", "admin@aivoice.studio", "Admin", "https://i.pravatar.cc/150?u=admin", 999999, True, date(2023, 1, 15)),
    ]


def demo_plans():
    return [
        PricingPlan("plan_starter", "Khởi đầu", 99000, 100000,
                    ["100,000 ký tự", "Giọng nói cơ bản", "Hỗ trợ email"]),
        PricingPlan("plan_pro", "Chuyên nghiệp", 249000, 500000,
                    ["500,000 ký tự", "Giọng nói cao cấp", "API Access", "Hỗ trợ ưu tiên"], popular=True),
        PricingPlan("plan_business", "Doanh nghiệp", 799000, 2000000,
                    ["2,000,000 ký tự", "Tất cả giọng nói", "Tùy chỉnh giọng", "Quản lý nhóm"]),
    ]


def demo_discount_codes():
    return [
        DiscountCode("code_1", "WELCOME25", 25, date(2025, 12, 31)),
        DiscountCode("code_2", "SUMMER2024", 15, date(2024, 8, 31)),
        DiscountCode("code_3", "OLDCODE", 10, date(2023, 12, 31)),
    ]


def demo_transactions():
    return [
        Transaction("txn_1", "user_1", "Nguyễn Văn A", "plan_starter", "Khởi đầu", 99000, date(2024, 6, 2)),
        Transaction("txn_2", "user_2", "Trần Thị B", "plan_pro", "Chuyên nghiệp", 249000, date(2024, 6, 5)),
        Transaction("txn_3", "user_4", "Phạm Minh D", "plan_business", "Doanh nghiệp", 799000, date(2024, 6, 11)),
        Transaction("txn_4", "user01", "Người Dùng", "plan_pro", "Chuyên nghiệp", 249000, date(2024, 6, 18)),
        Transaction("txn_5", "user_2", "Trần Thị B", "plan_starter", "Khởi đầu", 99000, date(2024, 6, 25)),
        Transaction("txn_6", "user_1", "Nguyễn Văn A", "plan_pro", "Chuyên nghiệp", 186750, date(2024, 7, 1)),
    ]


async def seed_demo_data(
    user_repo: UserRepository,
    plan_repo: PlanRepository,
    code_repo: DiscountCodeRepository,
    txn_repo: TransactionRepository,
) -> None:
    """Populate empty repositories with demo records"""
    if await user_repo.count() == 0:
        for user in demo_users():
            await user_repo.create(user)
    if await plan_repo.count() == 0:
        for plan in demo_plans():
            await plan_repo.create(plan)
    if await code_repo.count() == 0:
        for code in demo_discount_codes():
            await code_repo.create(code)
    if await txn_repo.count() == 0:
        for txn in demo_transactions():
            await txn_repo.create(txn)

    logger.info(
        f"[STARTUP] Demo data ready: {await user_repo.count()} users, "
        f"{await plan_repo.count()} plans, {await code_repo.count()} discount codes, "
        f"{await txn_repo.count()} transactions"
    )
