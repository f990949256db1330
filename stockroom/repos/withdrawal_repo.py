# stockroom/repos/withdrawal_repo.py
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from stockroom.data.models.withdrawal import WithdrawalModel, WithdrawalItemModel


class WithdrawalRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_withdrawals(self, limit: int | None = None) -> list[WithdrawalModel]:
        #najnowsze pierwsze
        stmt = select(WithdrawalModel).order_by(WithdrawalModel.id.desc())
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.execute(stmt).scalars())

    def get_withdrawal(self, withdrawal_id: int) -> WithdrawalModel | None:
        return self.db.get(WithdrawalModel, withdrawal_id)

    def count(self) -> int:
        return self.db.execute(select(func.count(WithdrawalModel.id))).scalar_one()

    def next_id(self) -> int:
        return self.db.execute(select(func.coalesce(func.max(WithdrawalModel.id), 0))).scalar_one() + 1

    def withdrawn_quantities(self) -> list[tuple[int, int]]:
        """(product_id, suma wydanej ilosci) malejaco po ilosci."""
        total = func.sum(WithdrawalItemModel.quantity).label("total")
        stmt = (
            select(WithdrawalItemModel.product_id, total)
            .group_by(WithdrawalItemModel.product_id)
            .order_by(total.desc(), WithdrawalItemModel.product_id)
        )
        return [(row[0], row[1]) for row in self.db.execute(stmt)]

    def add_withdrawal(self, withdrawal: WithdrawalModel) -> WithdrawalModel:
        self.db.add(withdrawal)
        self.db.flush()
        return withdrawal

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
