from setuptools import setup, find_packages

setup(
    name="mobiliar",
    version="1.0.0",
    packages=find_packages(include=["mobiliar", "mobiliar.*"]),
    install_requires=[
        "django>=4.0",
        "djangorestframework",
        "drf-spectacular",
        "python-decouple",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    python_requires=">=3.11",
)
