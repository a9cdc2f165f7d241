from pydantic import BaseModel, Field

class CountryBase(BaseModel):
    name: str = Field(..., description="Country name")
    code: str = Field(..., description="Country code (e.g., 'ET', 'US')")

class CountryCreate(CountryBase):
    pass

class CountryUpdate(CountryBase):
    pass

class CountryResponse(CountryBase):
    id: int

class FormState(BaseModel):
    """Mirror of the country being created (no id) or edited (id set)."""
    id: int | None = None
    name: str = ""
    code: str = ""

    @property
    def is_editing(self) -> bool:
        return self.id is not None
