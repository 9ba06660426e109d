from pydantic import BaseModel


class SportResponse(BaseModel):
    id: int
    key: str
    name: str

    class Config:
        from_attributes = True


class SportListResponse(BaseModel):
    items: list[SportResponse]
    total: int


class CompetitionResponse(BaseModel):
    id: int
    sport_id: int
    external_id: str | None = None
    name: str
    country: str | None = None
    format: str | None = None

    class Config:
        from_attributes = True


class CompetitionListResponse(BaseModel):
    items: list[CompetitionResponse]
    total: int
