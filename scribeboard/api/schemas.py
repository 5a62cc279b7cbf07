"""Request bodies accepted by the JSON API."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from ..models import TranscriptionProvider

DisplayName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]


class CreateTranscriptionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    audio_asset_id: int
    provider: TranscriptionProvider
    model: str | None = None
    prompt_template: str | None = None
    custom_prompt: str | None = None
    language: str | None = Field(default=None, max_length=32)
    diarize: bool | None = None
    additional_config: dict[str, Any] | None = None


class UpdateTranscriptionRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = Field(default=None, max_length=200)
    custom_prompt: str | None = Field(default=None, max_length=4000)

    @model_validator(mode="after")
    def _at_least_one_field(self):
        if not self.model_fields_set:
            raise ValueError("No field to update")
        return self

    def changes(self) -> dict:
        return self.model_dump(include=self.model_fields_set)


class RenameSpeakerRequest(BaseModel):
    display_name: DisplayName


class SaveApiKeyRequest(BaseModel):
    provider: TranscriptionProvider
    api_key: str = Field(min_length=10)
    nickname: str | None = None
