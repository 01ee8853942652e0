"""AquaValuate: groundwater heavy metal pollution index (HMPI) pipeline."""

__version__ = "0.1.0"
