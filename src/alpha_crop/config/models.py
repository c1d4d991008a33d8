"""
Pydantic models for alpha-crop configuration.

Defines configuration schemas with validation, defaults, and documentation
for the crop command, directories and logging.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..geometry import Bounds


class LogLevel(str, Enum):
    """Supported logging levels."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class DirectoryConfig(BaseModel):
    """Directory configuration for batch runs."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    input_dir: str = Field(
        default="data/input",
        description="Directory containing images to crop"
    )
    output_dir: str = Field(
        default="data/output",
        description="Directory for cropped images"
    )
    debug_dir: str = Field(
        default="debug",
        description="Directory for debug images"
    )

    @field_validator('*')
    @classmethod
    def validate_directory_path(cls, v):
        """Validate directory path format."""
        if not v or not isinstance(v, str):
            raise ValueError("Directory path must be a non-empty string")
        return v.replace('\\', '/')  # Normalize path separators


class BoundsConfig(BaseModel):
    """Document region to scan for opaque pixels."""

    model_config = ConfigDict(extra="forbid")

    left: int = Field(default=0, ge=0, description="Left edge (inclusive)")
    top: int = Field(default=0, ge=0, description="Top edge (inclusive)")
    right: int = Field(gt=0, description="Right edge (exclusive)")
    bottom: int = Field(gt=0, description="Bottom edge (exclusive)")

    @model_validator(mode='after')
    def validate_extent(self):
        """Validate that the region is not empty."""
        if self.left >= self.right:
            raise ValueError("left must be less than right")
        if self.top >= self.bottom:
            raise ValueError("top must be less than bottom")
        return self

    def to_bounds(self) -> Bounds:
        return Bounds(left=self.left, top=self.top, right=self.right, bottom=self.bottom)


class CropConfig(BaseModel):
    """Configuration for the max-rectangle crop."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    inset: int = Field(
        default=1,
        ge=0,
        description="Pixels removed inward from every side of the found rectangle"
    )
    source_bounds: Optional[BoundsConfig] = Field(
        default=None,
        description="Region to scan; the whole image when unset"
    )
    output_suffix: str = Field(
        default="_cropped",
        description="Suffix appended to output file stems"
    )
    save_debug_images: bool = Field(
        default=False,
        description="Whether to save debug images"
    )
    debug_image_format: str = Field(
        default="png",
        pattern="^(png|jpg|jpeg)$",
        description="Format for debug images"
    )
    save_analysis: bool = Field(
        default=False,
        description="Write a JSON analysis file next to each output"
    )


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Base logging level"
    )
    log_file: Optional[str] = Field(
        default=None,
        description="Optional log file path"
    )
    use_rich: bool = Field(
        default=True,
        description="Whether to use rich console output"
    )
    format_style: str = Field(
        default="detailed",
        pattern="^(simple|detailed|minimal)$",
        description="Logging format style"
    )


class Config(BaseModel):
    """Main configuration model for alpha-crop."""

    model_config = ConfigDict(
        extra="forbid",  # Prevent extra fields
        validate_assignment=True,  # Validate on assignment
        use_enum_values=True,  # Use enum values in serialization
    )

    directories: DirectoryConfig = Field(
        default_factory=DirectoryConfig,
        description="Directory configuration"
    )
    crop: CropConfig = Field(
        default_factory=CropConfig,
        description="Crop configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration"
    )

    version: str = Field(
        default="1.0.0",
        description="Configuration version"
    )
    description: Optional[str] = Field(
        default=None,
        description="Configuration description"
    )
