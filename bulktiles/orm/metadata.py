from sqlmodel import Field, SQLModel


class MetadataItem(SQLModel, table=True):
    __tablename__ = "metadata"

    name: str = Field(primary_key=True)
    value: str | None = None
