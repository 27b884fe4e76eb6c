from setuptools import setup, find_namespace_packages

setup(
    name="tweetlabel",
    version="0.1.0",
    packages=find_namespace_packages(include=["data_collection", "orchestration", "training", "utils"]),
    py_modules=["config"],
    install_requires=[
        "python-dotenv",
        "requests",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-timeout",
        ]
    },
    entry_points={
        "console_scripts": [
            "tweetlabel=orchestration.main:main",
        ]
    },
    python_requires=">=3.8",
)
