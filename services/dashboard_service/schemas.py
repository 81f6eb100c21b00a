from pydantic import BaseModel


class DashboardCounters(BaseModel):
    total_members: int
    active_members: int
    upcoming_classes: int
    active_trainers: int
