from sqlalchemy import Column, Index, Text, func

from preinscription.platform.db.base import BaseModel


class Preinscription(BaseModel):
    __tablename__ = "preinscriptions"
    email = Column(Text, nullable=False)
    country = Column(Text, nullable=True)
    interest = Column(Text, nullable=True)
    lang = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Preinscription(id={self.id}, email='{self.email}')>"


# One row per address, whatever its case
EMAIL_UNIQUE_INDEX = Index(
    "preinscriptions_email_unique",
    func.lower(Preinscription.email),
    unique=True,
)
