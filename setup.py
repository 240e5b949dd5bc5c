# setup.py
from setuptools import setup, find_packages

setup(
    name="site_manifest",
    version="0.1.0",
    description="Build-time sitemap.xml and robots.txt generator",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"site_manifest": ["templates/*.j2"]},
    include_package_data=True,
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "jinja2>=3.1",
        "lxml>=5.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "site-manifest=site_manifest.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
