from pydantic import BaseModel


class HealthOut(BaseModel):
    ok: bool = True
