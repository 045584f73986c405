# setup.py
from setuptools import setup, find_packages

setup(
    name="check_pages",
    version="0.1.0",
    description="Проверка страниц сайта и всех их ссылок перед публикацией",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"check_pages": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "jinja2>=3.1",
        "lxml>=5.0",
        "multidict>=6.0",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "check-pages=check_pages.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
