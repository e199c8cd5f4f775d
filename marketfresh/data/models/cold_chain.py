# marketfresh/data/models/cold_chain.py
from sqlalchemy import Boolean, CheckConstraint, Column, Float, ForeignKey, Integer, Uuid
from sqlalchemy.orm import relationship

from marketfresh.data.database import Base


class ColdChainSpecModel(Base):
    __tablename__ = "meat_details"

    product_id = Column(Uuid, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)

    storage_min_c = Column(Float, nullable=False)
    storage_max_c = Column(Float, nullable=False)
    max_hours_outside_cold_chain = Column(Integer, nullable=False)
    cold_chain_required = Column(Boolean, nullable=False, default=True)

    product = relationship("ProductModel", back_populates="cold_chain")

    __table_args__ = (
        CheckConstraint("max_hours_outside_cold_chain >= 0", name="ck_meat_details_hours"),
    )
