from app.schemas.projects import (
    Integration,
    ProjectSnapshot,
    Reward,
    ShippingFee,
    UserRecord,
)
