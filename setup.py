from setuptools import setup, find_packages

setup(
    name="snapmetrics",
    version="0.1.0",
    description="Counter, gauge and histogram metrics with reservoir sampling and atomic snapshots",
    author="adamfilli",
    packages=find_packages(include=["snapmetrics", "snapmetrics.*"]),
    install_requires=[
        "pandas",
    ],
    extras_require={
        "test": [
            "pytest",
            "numpy",
            "matplotlib",
        ],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
