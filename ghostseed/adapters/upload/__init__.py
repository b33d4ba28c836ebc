"""
Adaptateurs d'envoi vers les trackers prives.

- TorrustUploader : Tracker Torrust (multipart HTTP)
"""

from ghostseed.adapters.upload.torrust import TorrustUploader

__all__ = ["TorrustUploader"]
