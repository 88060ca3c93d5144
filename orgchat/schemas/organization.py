from pydantic import BaseModel


class OrganizationResponse(BaseModel):
    id: str
    name: str
