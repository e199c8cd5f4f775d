# marketfresh/repos/product_repo.py
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from marketfresh.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_active(self, product_type: str | None = None) -> list[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.is_active.is_(True))
        if product_type:
            stmt = stmt.where(ProductModel.type == product_type)
        stmt = stmt.order_by(ProductModel.created_at.desc())
        return list(self.db.execute(stmt).scalars().all())

    def get_product(self, product_id: UUID) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_active_product(self, product_id: UUID) -> ProductModel | None:
        stmt = (
            select(ProductModel)
            .options(selectinload(ProductModel.cold_chain))
            .where(ProductModel.id == product_id, ProductModel.is_active.is_(True))
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def decrement_stock(self, product_id: UUID, quantity: int) -> int:
        """
        UPDATE products SET stock_qty = stock_qty - n WHERE id = :id AND stock_qty >= n
        Returns affected rows, 0 means the stock would go negative.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock_qty >= quantity)
            .values(stock_qty=ProductModel.stock_qty - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount
