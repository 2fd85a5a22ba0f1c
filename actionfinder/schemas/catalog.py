from pydantic import BaseModel, Field

# --- Generated catalog ---


class Action(BaseModel):
    name: str = Field(..., min_length=1)
    description: str

    model_config = {"frozen": True}


class App(BaseModel):
    name: str = Field(..., min_length=1)
    description: str
    actions: list[Action]

    model_config = {"frozen": True}


# --- API responses ---


class NearestActionResponse(BaseModel):
    app_id: int = Field(..., alias="appId", serialization_alias="appId")
    app_name: str = Field(..., alias="appName", serialization_alias="appName")
    action_id: int = Field(..., alias="actionId", serialization_alias="actionId")
    action_name: str = Field(..., alias="actionName", serialization_alias="actionName")
    action_description: str = Field(..., alias="actionDescription", serialization_alias="actionDescription")
    distance: float

    model_config = {"populate_by_name": True}


class SeedResponse(BaseModel):
    apps: int
    actions: int
