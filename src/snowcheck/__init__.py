"""Line width and Rust import style checks for CI."""

__version__ = "0.1.0"
