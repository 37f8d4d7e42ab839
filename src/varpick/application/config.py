"""Picker configuration.

Options can be built in code or loaded from a JSON file whose keys follow the
editor-plugin naming (``variables``, ``includeParentNodes``, ``token``, ...).
"""

import json
from pathlib import Path
from typing import Any, Callable, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from varpick.application.formatter import resolve_token_policy
from varpick.domain.catalog import Catalog, parse_catalog
from varpick.domain.exceptions import CatalogError, ConfigurationError
from varpick.domain.tokens import CustomFormat, TokenPolicy, TokenWrap
from varpick.logger import get_logger

logger = get_logger("config")

DEFAULT_PLACEHOLDER = "Variables"
DEFAULT_ICON = "{ }"


class PickerConfig(BaseModel):
    """Options consumed at construction and on catalog updates."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    catalog: Catalog = Field(
        default_factory=dict,
        validation_alias=AliasChoices("catalog", "variables"),
        description="Hierarchical variable catalog",
    )
    include_parent_nodes: bool = Field(
        False,
        validation_alias=AliasChoices("include_parent_nodes", "includeParentNodes"),
        description="Whether entries with children are insertable too",
    )
    token: Union[TokenWrap, Callable[[str], str]] = Field(
        default_factory=TokenWrap,
        description="Delimiters around the address, or a function producing the token",
    )
    placeholder: str = Field(DEFAULT_PLACEHOLDER, description="Trigger label")
    icon: str = Field(DEFAULT_ICON, description="Trigger icon text")
    ungrouped_title: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("ungrouped_title", "ungroupedTitle"),
        description="Heading of the section holding top-level leaves",
    )

    @field_validator("token", mode="before")
    @classmethod
    def _coerce_token(cls, value: Any) -> Any:
        if value is None:
            return TokenWrap()
        if isinstance(value, tuple) and len(value) == 2:
            return TokenWrap(open=value[0], close=value[1])
        if isinstance(value, dict):
            return TokenWrap(**{k: v for k, v in value.items() if v is not None})
        return value

    def token_policy(self) -> TokenPolicy:
        """Resolve the ``token`` option into a formatter policy."""
        return resolve_token_policy(self.token)

    def with_catalog(self, catalog: Catalog) -> "PickerConfig":
        return self.model_copy(update={"catalog": catalog})


def build_config(
    catalog: Any = None,
    include_parent_nodes: bool = False,
    token: Any = None,
    **options: Any,
) -> PickerConfig:
    """
    Build a ``PickerConfig`` from loose arguments.

    Raises:
        CatalogError: If the catalog data is malformed
        ConfigurationError: If any other option is invalid
    """
    parsed = parse_catalog(catalog)
    if token is not None and not isinstance(token, (TokenWrap, CustomFormat)) and not callable(token):
        # Validates mapping/tuple shapes early with a descriptive error
        resolve_token_policy(token)
    if isinstance(token, CustomFormat):
        token = token.fn

    try:
        return PickerConfig(catalog=parsed, include_parent_nodes=include_parent_nodes, token=token, **options)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid picker options: {e}") from e


def load_picker_config(config_path: str | Path, **overrides: Any) -> PickerConfig:
    """
    Load picker options from a JSON file.

    The file either holds the full options object (with a ``variables`` or
    ``catalog`` key) or just the catalog mapping itself.

    Args:
        config_path: Path to the JSON file
        **overrides: Options that take precedence over the file contents; a
            ``token`` mapping only replaces the delimiter sides it sets

    Raises:
        FileNotFoundError: If the file doesn't exist
        ConfigurationError: If the JSON is invalid or the options are malformed
        CatalogError: If the catalog is malformed
    """
    config_path = Path(config_path)
    if not config_path.exists():
        error_msg = f"Picker configuration file not found: {config_path}"
        logger.error(error_msg)
        raise FileNotFoundError(error_msg)

    logger.info(f"Loading picker configuration from: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        error_msg = f"Invalid JSON in configuration file {config_path}: {e}"
        logger.error(error_msg)
        raise ConfigurationError(error_msg) from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {config_path} must contain a JSON object")

    if "variables" not in data and "catalog" not in data:
        data = {"catalog": data}

    options = {k: v for k, v in data.items() if k not in ("variables", "catalog")}
    catalog_data = data.get("catalog", data.get("variables"))
    if "includeParentNodes" in options:
        options["include_parent_nodes"] = options.pop("includeParentNodes")
    if "ungroupedTitle" in options:
        options["ungrouped_title"] = options.pop("ungroupedTitle")
    for key, value in overrides.items():
        if value is None:
            continue
        if key == "token" and isinstance(value, dict) and isinstance(options.get("token"), dict):
            # Delimiter sides given as overrides replace only their own side
            value = {**options["token"], **{k: v for k, v in value.items() if v is not None}}
        options[key] = value

    try:
        config = build_config(catalog_data, **options)
    except CatalogError as e:
        logger.error(f"Invalid catalog in {config_path}: {e}")
        raise

    logger.info(f"Loaded catalog with {len(config.catalog)} top-level entries")
    return config
