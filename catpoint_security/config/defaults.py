"""Default configuration values and constants."""

# File paths and directories
DEFAULT_PATHS = {
    "config_file": "config.json",
    "repository_file": "data/security.json",
    "logs_dir": "logs"
}

# Supported image classifiers
IMAGE_SERVICES = ("fake", "cascade")

# Haar cascade settings for the local cat classifier
MODEL_SETTINGS = {
    "cascade_files": (
        "haarcascade_frontalcatface.xml",
        "haarcascade_frontalcatface_extended.xml"
    ),
    "scale_factor": 1.1,
    "min_neighbors": 3,
    "min_size": (30, 30),
    "max_size": (300, 300)
}
