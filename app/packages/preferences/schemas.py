"""Pydantic schemas for the preferences package."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from infrastructure.i18n import normalize_country_code


class PreferencesResponse(BaseModel):
    """The visitor's active locale."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "country_code": "TR",
                "language_code": "tr",
                "direction": "ltr",
                "country_name": "Turkey",
                "source": "geolocation",
                "url_sync": False,
            }
        }
    )

    country_code: str = Field(..., description="ISO 3166-1 alpha-2 country code")
    language_code: str = Field(..., description="Active UI language")
    direction: str = Field(..., description="Text direction, ltr or rtl")
    country_name: str = Field(..., description="English country name")
    source: str = Field(..., description="Where the pair was resolved from")
    url_sync: bool = Field(..., description="Whether the URL carries the language")


class NavigationResponse(BaseModel):
    url: str = Field(..., description="URL the client should move to")
    replace: bool = Field(True, description="Replace the history entry instead of pushing")


class PreferencesChangeResponse(BaseModel):
    """Result of an explicit preference change."""

    country_code: str
    language_code: str
    direction: str
    country_changed: bool
    language_changed: bool
    navigation: Optional[NavigationResponse] = None


class SetCountryRequest(BaseModel):
    country_code: str = Field(
        ..., description="Two-letter country code", examples=["TR", "de"]
    )
    current_url: Optional[str] = Field(
        None, description="Current page URL, used to keep the language segment in sync"
    )

    @field_validator("country_code")
    @classmethod
    def validate_country_code(cls, v: str) -> str:
        """Validate and uppercase the country code."""
        return normalize_country_code(v)


class SetLanguageRequest(BaseModel):
    """Unsupported language codes are accepted and replaced by English."""

    language_code: str = Field(..., description="Language code", examples=["fr"])
    current_url: Optional[str] = Field(
        None,
        description="Current page URL; its language segment is rewritten",
        examples=["/fr/search?q=drama#results"],
    )


class CountriesResponse(BaseModel):
    countries: Dict[str, str] = Field(
        ..., description="Country code to English name, sorted by name"
    )


class LanguageInfo(BaseModel):
    code: str
    direction: str
    country_code: str = Field(..., description="Representative country")


class LanguagesResponse(BaseModel):
    languages: List[LanguageInfo]


class PageContextResponse(BaseModel):
    """Document attributes for a language-prefixed page."""

    lang: str = Field(..., description="Value for the html lang attribute")
    dir: str = Field(..., description="Value for the html dir attribute")
    country_code: str
    path: str
