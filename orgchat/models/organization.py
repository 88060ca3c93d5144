from pydantic import BaseModel, ConfigDict


class Organization(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
