# -*- coding: utf-8 -*-
"""
src/fontprint/config.py

Module for handling application configuration.

The heuristic constants of the pipeline (line clustering threshold, classifier
penalties, rounding precision, virtual rendering assumptions) are policy, not
measurements, so they live here with documented defaults. `Settings` is the
immutable value the core functions receive; `Config` loads it from a
user-specific config.ini, creating one with default values on first use.
"""

import configparser
import logging
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

# --- Constants ---
APP_NAME = "FontPrint"
DEFAULT_CONFIG_FILENAME = "config.ini"
DEFAULT_CORPUS_FILENAME = "fontprint_corpus.json"


@dataclass(frozen=True)
class Settings:
    """
    Tunable constants consumed by the extraction, classification,
    normalization and hashing stages.

    Attributes:
        line_merge_threshold_px: A line center further than this from the last
            accepted line starts a new line; closer centers are treated as noise.
        min_line_gap_px: Line-to-line differences at or below this are dropped
            before the line gap median.
        ocr_confidence_threshold: Boxes with a lower recognizer confidence are
            ignored. Boxes without a confidence are always kept.
        glyph_sample_limit: Maximum number of glyph signatures kept.
        glyph_scan_limit: Number of leading boxes scanned for glyph signatures.
        pixels_per_inch: Resolution assumed for px/pt/mm conversions.
        sans_penalty: Multiplier applied to the sans-serif score.
        mono_score: Fixed score of the monospace candidate.
        decimals: Rounding precision of the feature vector.
        virtual_font_size_px: Assumed font size of virtually rendered text.
        virtual_line_height_ratio: Assumed line height / font size ratio.
        virtual_padding_px: Assumed page padding of virtually rendered text.
        hash_algorithm: hashlib algorithm used for the fingerprint hash.
        hash_candidate_count: Number of leading candidates included in the hash.
        overlap_limit: Maximum number of shared candidate names reported.
    """

    line_merge_threshold_px: float = 4.0
    min_line_gap_px: float = 1.0
    ocr_confidence_threshold: float = 0.0
    glyph_sample_limit: int = 25
    glyph_scan_limit: int = 120
    pixels_per_inch: float = 96.0
    sans_penalty: float = 0.9
    mono_score: float = 0.1
    decimals: int = 1
    virtual_font_size_px: float = 17.0
    virtual_line_height_ratio: float = 1.6
    virtual_padding_px: float = 72.0
    hash_algorithm: str = "sha256"
    hash_candidate_count: int = 3
    overlap_limit: int = 3


DEFAULT_SETTINGS = Settings()


def get_app_dir() -> Path:
    """
    Gets the application's data directory in a cross-platform way.

    This directory is used to store the configuration file and the
    fingerprint corpus.

    - Windows: %APPDATA%/FontPrint
    - macOS: ~/Library/Application Support/FontPrint
    - Linux: ~/.config/FontPrint

    Returns:
        Path: A Path object to the application's data directory.
    """
    if platform.system() == "Windows":
        app_dir = Path.home() / "AppData" / "Roaming" / APP_NAME
    elif platform.system() == "Darwin":  # macOS
        app_dir = Path.home() / "Library" / "Application Support" / APP_NAME
    else:  # Linux and other Unix-like
        app_dir = Path.home() / ".config" / APP_NAME

    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


class Config:
    """
    Manages application configuration by loading defaults and overriding
    them with settings from a user-specific config file.
    """

    def __init__(self, config_file_path: Optional[Path] = None):
        """
        Initializes the configuration manager.

        Args:
            config_file_path (Path, optional): Explicit config.ini location.
                Defaults to config.ini inside the application directory.
        """
        self.parser = configparser.ConfigParser()
        if config_file_path is None:
            self.app_dir = get_app_dir()
            self.config_file_path = self.app_dir / DEFAULT_CONFIG_FILENAME
        else:
            self.config_file_path = Path(config_file_path)
            self.app_dir = self.config_file_path.parent

        self._load_defaults()
        self._load_from_file()

    def _load_defaults(self):
        """Sets the default configuration values in the parser object."""
        d = DEFAULT_SETTINGS
        self.parser["Extraction"] = {
            "line_merge_threshold_px": str(d.line_merge_threshold_px),
            "min_line_gap_px": str(d.min_line_gap_px),
            "ocr_confidence_threshold": str(d.ocr_confidence_threshold),
            "glyph_sample_limit": str(d.glyph_sample_limit),
            "glyph_scan_limit": str(d.glyph_scan_limit),
            "pixels_per_inch": str(d.pixels_per_inch),
        }
        self.parser["Classifier"] = {
            "sans_penalty": str(d.sans_penalty),
            "mono_score": str(d.mono_score),
        }
        self.parser["Normalizer"] = {
            "decimals": str(d.decimals),
        }
        self.parser["Virtual"] = {
            "font_size_px": str(d.virtual_font_size_px),
            "line_height_ratio": str(d.virtual_line_height_ratio),
            "padding_px": str(d.virtual_padding_px),
        }
        self.parser["Hashing"] = {
            "algorithm": d.hash_algorithm,
            "candidate_count": str(d.hash_candidate_count),
        }
        self.parser["Corpus"] = {
            "corpus_filename": DEFAULT_CORPUS_FILENAME,
        }
        self.parser["Display"] = {
            "results_count": "3",
        }

    def _load_from_file(self):
        """
        Loads settings from the config.ini file, overriding defaults.
        If the file doesn't exist, it will be created with default values.
        """
        if not self.config_file_path.exists():
            self._save_defaults()
        else:
            self.parser.read(self.config_file_path)
            logger.debug(f"Loaded configuration from {self.config_file_path}")

    def _save_defaults(self):
        """Saves the current (default) configuration to the config file."""
        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w") as configfile:
                configfile.write(f"# {APP_NAME} Configuration File\n")
                configfile.write("# You can edit these values. Changes apply to the next run.\n\n")
                self.parser.write(configfile)
        except IOError as e:
            # Non-critical: the defaults stay in memory.
            logger.error(f"Could not write to config file at {self.config_file_path}: {e}")

    # --- Properties to access settings easily and with correct types ---

    @property
    def corpus_path(self) -> Path:
        """The full path to the JSON fingerprint corpus."""
        filename = self.parser.get("Corpus", "corpus_filename", fallback=DEFAULT_CORPUS_FILENAME)
        return self.app_dir / filename

    @property
    def results_count(self) -> int:
        """The number of nearest corpus matches to display."""
        return self.parser.getint("Display", "results_count", fallback=3)

    @property
    def settings(self) -> Settings:
        """The pipeline constants, typed and frozen."""
        d = DEFAULT_SETTINGS
        p = self.parser
        return Settings(
            line_merge_threshold_px=p.getfloat("Extraction", "line_merge_threshold_px", fallback=d.line_merge_threshold_px),
            min_line_gap_px=p.getfloat("Extraction", "min_line_gap_px", fallback=d.min_line_gap_px),
            ocr_confidence_threshold=p.getfloat("Extraction", "ocr_confidence_threshold", fallback=d.ocr_confidence_threshold),
            glyph_sample_limit=p.getint("Extraction", "glyph_sample_limit", fallback=d.glyph_sample_limit),
            glyph_scan_limit=p.getint("Extraction", "glyph_scan_limit", fallback=d.glyph_scan_limit),
            pixels_per_inch=p.getfloat("Extraction", "pixels_per_inch", fallback=d.pixels_per_inch),
            sans_penalty=p.getfloat("Classifier", "sans_penalty", fallback=d.sans_penalty),
            mono_score=p.getfloat("Classifier", "mono_score", fallback=d.mono_score),
            decimals=p.getint("Normalizer", "decimals", fallback=d.decimals),
            virtual_font_size_px=p.getfloat("Virtual", "font_size_px", fallback=d.virtual_font_size_px),
            virtual_line_height_ratio=p.getfloat("Virtual", "line_height_ratio", fallback=d.virtual_line_height_ratio),
            virtual_padding_px=p.getfloat("Virtual", "padding_px", fallback=d.virtual_padding_px),
            hash_algorithm=p.get("Hashing", "algorithm", fallback=d.hash_algorithm),
            hash_candidate_count=p.getint("Hashing", "candidate_count", fallback=d.hash_candidate_count),
        )
