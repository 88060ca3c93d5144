from pydantic import BaseModel, Field


class CreateOrganizationDTO(BaseModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
