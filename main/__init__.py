#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Main entry point for InkReader
"""

from pathlib import Path
from typing import List, Optional

from .setup.arguments import setup_arguments
from .setup.initialization import setup_logging_and_cleanup

from character_recognition import (
    CharacterRecognitionError,
    CharacterRecognizer,
    TemplateManager,
    load_grid,
    parse_color,
)
from character_recognition.segmentation import segment_image_with_debug
from config import EXIT_CONFIG_ERROR, EXIT_OK
from utils.logging import get_logger, log_success

log = get_logger()


def run_reader(args) -> int:
    """Read every image named in args and print one line of text per image."""
    template_manager = TemplateManager(args.languages_dir)

    if args.list_languages:
        for language in template_manager.available_languages():
            print(language)
        return EXIT_OK

    if not args.images:
        log.error("No images given (see --help)")
        return EXIT_CONFIG_ERROR

    try:
        background = parse_color(args.background)
        reader = CharacterRecognizer(
            language=args.language,
            background=background,
            template_manager=template_manager,
            match_policy=args.match_policy,
            measure_time=args.verbose or args.debug,
        )
    except CharacterRecognitionError as e:
        log.error(f"Configuration error: {e}")
        return EXIT_CONFIG_ERROR

    debug_dir = Path(args.debug_output) if args.debug_output else None
    if debug_dir:
        debug_dir.mkdir(parents=True, exist_ok=True)

    exit_code = EXIT_OK
    for image in args.images:
        try:
            grid = load_grid(image)
            if debug_dir:
                segment_image_with_debug(grid, background,
                                         debug_output_path=debug_dir / f"{Path(image).stem}_segments.png")
            text = reader.read(grid)
        except CharacterRecognitionError as e:
            log.error(f"{image}: {e}")
            exit_code = EXIT_CONFIG_ERROR
            continue
        print(text)
        log_success(log, f"{Path(image).name}: '{text}'")

    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, configure logging and run the reader"""
    args = setup_arguments(argv)
    setup_logging_and_cleanup(args)
    return run_reader(args)


__all__ = ['main', 'run_reader']

