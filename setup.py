"""Setup script for Map Organiser"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README
this_directory = Path(__file__).parent
long_description = ""
readme_path = this_directory / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")

setup(
    name="map-organiser",
    version="0.1.0",
    author="Tomáš Hula",
    author_email="",
    description="Region and map indexes for orienteering events, geocoded via Nominatim",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/tomhula/map-organiser",
    project_urls={
        "Bug Tracker": "https://github.com/tomhula/map-organiser/issues",
        "Source Code": "https://github.com/tomhula/map-organiser",
    },
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: End Users/Desktop",
        "Topic :: Scientific/Engineering :: GIS",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "requests>=2.28.0",
        "typer>=0.9.0",
        "rich>=13.0.0",
        "tomli>=2.0.0; python_version < '3.11'",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "map-organiser=map_organiser.cli:app",
        ],
    },
    keywords="orienteering oris nominatim geocoding index",
)
