"""Dynamic seed price catalog."""

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from garden_api.database import Base


class SeedCatalogEntry(Base):
    """Latest base price for a non-basic seed class, set by breeding."""

    __tablename__ = "seed_catalog"

    seed_class: Mapped[str] = mapped_column(String(50), primary_key=True)
    base_price: Mapped[int] = mapped_column(BigInteger, nullable=False)
