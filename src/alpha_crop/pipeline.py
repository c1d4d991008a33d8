"""Batch pipeline and command line interface for the max-rectangle crop."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .actions import ActionRegistry, ActionStep, default_registry, load_actions, save_actions
from .commands import COMMAND_NAME, CropOutcome, CropResult
from .config import BoundsConfig, Config, load_config
from .cropper import AlphaCropProcessor
from .exceptions import AlphaCropError
from .host import ImageDocument
from .processors import get_image_files, load_image, save_image
from .utils.logging_utils import BatchProgress, console, setup_logging

logger = logging.getLogger(__name__)


class AlphaCropPipeline:
    """Crops every image of a file or directory to its largest opaque rectangle."""

    def __init__(self, config: Optional[Config] = None, registry: Optional[ActionRegistry] = None):
        """Initialize pipeline with configuration and an action registry."""
        self.config = config or Config()
        self.registry = registry or default_registry()
        self.processor = AlphaCropProcessor(self.config.crop)
        self.action_steps: Optional[List[ActionStep]] = None
        self.record_path: Optional[Path] = None
        self.last_counts: Dict[str, int] = {}

    def _source_bounds(self):
        bounds = self.config.crop.source_bounds
        return bounds.to_bounds() if bounds else None

    def _run_command(self, document: ImageDocument, **options: Any) -> CropResult:
        """Run the crop command, or replay loaded action steps instead."""
        if self.action_steps is None:
            return self.registry.invoke(COMMAND_NAME, document, **options)

        results = self.registry.play(self.action_steps, document)
        applied = [result for result in results if result.applied]
        if applied:
            return applied[-1]
        return results[-1] if results else CropResult(CropOutcome.NO_DOCUMENT)

    def output_path_for(self, image_path: Path, output_dir: Optional[Path] = None) -> Path:
        output_dir = output_dir or Path(self.config.directories.output_dir)
        return output_dir / f"{image_path.stem}{self.config.crop.output_suffix}{image_path.suffix}"

    def process_image(self, image_path: Path, output_dir: Optional[Path] = None) -> Optional[Path]:
        """Crop a single image file.

        Returns:
            Path of the written image, or None when the image was left unchanged

        Raises:
            AlphaCropError: If the image cannot be loaded or saved
        """
        image_path = Path(image_path)
        image = load_image(image_path)

        cropped, analysis = self.processor.process(
            image,
            inset=self.config.crop.inset,
            source_bounds=self._source_bounds(),
            command=self._run_command,
            return_analysis=True,
        )

        if self.config.crop.save_debug_images:
            self.processor.save_debug_images(Path(self.config.directories.debug_dir), image_path.stem)

        output_path = self.output_path_for(image_path, output_dir)
        if self.config.crop.save_analysis:
            self._save_analysis(analysis, output_path.with_name(f"{image_path.stem}_crop.json"))

        if not analysis["success"]:
            logger.info(f"{image_path.name}: no crop applied ({analysis['outcome']})")
            return None

        save_image(cropped, output_path)
        logger.info(
            f"{image_path.name}: {analysis['original_shape'][1]}x{analysis['original_shape'][0]}"
            f" -> {analysis['cropped_shape'][1]}x{analysis['cropped_shape'][0]}, saved {output_path}"
        )
        return output_path

    def _save_analysis(self, analysis: Dict[str, Any], path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open('w', encoding='utf-8') as f:
            json.dump(analysis, f, indent=2)

    def _process_recorded(self, image_path: Path, output_dir: Optional[Path]) -> Optional[Path]:
        """Process one image while recording its actions to ``record_path``."""
        self.registry.start_recording()
        try:
            return self.process_image(image_path, output_dir)
        finally:
            steps = self.registry.stop_recording()
            save_actions(steps, self.record_path)
            logger.info(f"Recorded {len(steps)} action(s) to {self.record_path}")
            self.record_path = None

    def process_directory(
        self, input_dir: Optional[Path] = None, output_dir: Optional[Path] = None
    ) -> List[Path]:
        """Process all images in input directory."""
        input_dir = Path(input_dir or self.config.directories.input_dir)

        if not input_dir.exists():
            raise ValueError(f"Input directory does not exist: {input_dir}")

        image_files = get_image_files(input_dir)

        if not image_files:
            logger.warning(f"No image files found in: {input_dir}")
            return []

        outputs = []
        with BatchProgress(f"Cropping {input_dir}", len(image_files), logger,
                           enabled=self.config.logging.use_rich) as progress:
            for image_path in image_files:
                try:
                    if self.record_path is not None:
                        output = self._process_recorded(image_path, output_dir)
                    else:
                        output = self.process_image(image_path, output_dir)
                except AlphaCropError as e:
                    logger.error(f"Error processing {image_path}: {e}")
                    progress.record("failed")
                    continue

                if output is None:
                    progress.record("unchanged")
                else:
                    progress.record("cropped")
                    outputs.append(output)

        self.last_counts = dict(progress.counts)
        return outputs

    def run(self, input_path: Optional[Path] = None, output_dir: Optional[Path] = None) -> List[Path]:
        """Crop a single file or every image of a directory."""
        input_path = Path(input_path or self.config.directories.input_dir)

        if input_path.is_file():
            if self.record_path is not None:
                output = self._process_recorded(input_path, output_dir)
            else:
                output = self.process_image(input_path, output_dir)
            return [output] if output else []

        return self.process_directory(input_path, output_dir)


def _parse_bounds(text: str) -> BoundsConfig:
    try:
        left, top, right, bottom = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected LEFT,TOP,RIGHT,BOTTOM, got {text!r}")
    try:
        return BoundsConfig(left=left, top=top, right=right, bottom=bottom)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="alpha-crop",
        description=f"{COMMAND_NAME}: crop images to their largest fully-opaque rectangle",
    )
    parser.add_argument(
        "input", nargs="?", help="Input image or directory (default: use config)"
    )
    parser.add_argument("-o", "--output", help="Output directory (default: use config)")
    parser.add_argument("-c", "--config", help="Configuration file (JSON, YAML or TOML)")
    parser.add_argument("--inset", type=int, help="Pixels removed inward from each side")
    parser.add_argument("--bounds", type=_parse_bounds, metavar="L,T,R,B",
                        help="Only scan this region of each image")
    parser.add_argument("--debug", action="store_true", help="Save debug images")
    parser.add_argument("--analysis", action="store_true", help="Write a JSON analysis per image")
    parser.add_argument("--record-actions", metavar="FILE",
                        help="Record the actions run on the first image to FILE")
    parser.add_argument("--play-actions", metavar="FILE",
                        help="Replay the actions recorded in FILE on every image")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    parser.add_argument("--no-rich", action="store_true", help="Disable rich console output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Command line interface."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose and args.quiet:
        parser.error("Cannot specify both --verbose and --quiet")
    if args.inset is not None and args.inset < 0:
        parser.error("--inset must not be negative")

    try:
        config = load_config(args.config) if args.config else Config()
    except AlphaCropError as e:
        console.print(f"Error: {e}")
        return 1

    # Only override config values the user explicitly set
    if args.output:
        config.directories.output_dir = args.output
    if args.inset is not None:
        config.crop.inset = args.inset
    if args.bounds is not None:
        config.crop.source_bounds = args.bounds
    if args.debug:
        config.crop.save_debug_images = True
    if args.analysis:
        config.crop.save_analysis = True
    if args.verbose:
        config.logging.level = "DEBUG"
    elif args.quiet:
        config.logging.level = "WARNING"
    if args.no_rich:
        config.logging.use_rich = False

    setup_logging(
        level=config.logging.level,
        log_file=config.logging.log_file,
        use_rich=config.logging.use_rich,
        format_style=config.logging.format_style,
    )

    pipeline = AlphaCropPipeline(config)
    try:
        if args.play_actions:
            pipeline.action_steps = load_actions(args.play_actions)
        if args.record_actions:
            pipeline.record_path = Path(args.record_actions)
        outputs = pipeline.run(Path(args.input) if args.input else None)
    except (AlphaCropError, ValueError) as e:
        logger.error(str(e))
        return 1

    console.print(f"[{COMMAND_NAME}] {len(outputs)} image(s) cropped", markup=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
