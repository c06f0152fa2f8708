"""RFM segmentation toolkit for the Olist Brazilian e-commerce dataset."""

__version__ = "0.1.0"
