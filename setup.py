import setuptools

try:
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "Submit jobs and ship code packages to a Ray cluster"

setuptools.setup(
    name="ray-dashboard-sdk",
    version="0.1.0",
    description="Submit jobs and ship code packages to a Ray cluster",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src", include=["ray_dashboard_sdk", "ray_dashboard_sdk.*"]),
    install_requires=[
        "httpx",
        "pydantic>=2.11",
        "pathspec>=0.11,<1",
        "python-dotenv",
        "rich",
        "typer",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        "console_scripts": [
            "ray-dash=ray_dashboard_sdk.cli.main:app",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
)
