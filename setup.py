from setuptools import setup, find_packages
import os
import logging

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

def read_readme() -> str:
    """
    Read the README.md file or return a default description.

    Returns:
        str: The contents of README.md or a default description
    """
    default_description = "FakeYou client - text-to-speech and face animation jobs"
    readme_path = "README.md"

    try:
        if not os.path.exists(readme_path):
            logger.warning("README.md not found, using default description")
            return default_description

        with open(readme_path, "r", encoding="utf-8") as f:
            return f.read()

    except OSError as e:
        logger.error(f"Error reading README.md: {e}")
        return default_description

# Setup configuration
setup(
    name="fakeyou-client",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "PyYAML",
        "requests",
        "typing-extensions>=4.0.0",  # Required for ParamSpec in Python < 3.10
    ],
    extras_require={
        'dev': [
            'pytest',
            'pytest-cov',
            'mypy',
            'ruff',
            'black',
            'types-PyYAML',
            'types-requests',
        ]
    },
    python_requires=">=3.8",
    description="FakeYou client - text-to-speech and face animation jobs",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
)
