# app/models/product.py
import uuid
from sqlalchemy import Column, String, BigInteger, Boolean, Uuid
from app.core.database import Base

class Product(Base):
    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(length=255), nullable=False)
    category = Column(String(length=100), nullable=False)
    price = Column(BigInteger, nullable=False)
    image_url = Column(String, nullable=True)
    description = Column(String, nullable=True)
    available = Column(Boolean(), nullable=False, default=True)

    def __repr__(self):
        return f"<Product name={self.name} price={self.price} available={self.available}>"
