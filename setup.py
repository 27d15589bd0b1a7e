"""
Setup script for the quiz-judge package.

The game core lives under src/quiz_judge; the SQLite schema ships as
package data next to the store modules.
"""

from setuptools import setup, find_packages

setup(
    name="quiz-judge",
    version="1.0.0",
    description="Year-end AI quiz - open-ended answers scored by a language model",
    author="Party Committee",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "anthropic>=0.18.0",
        "requests>=2.31.0",
        "firebase-admin>=6.2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "httpx",
        ],
        "dev": [
            "pytest>=7.4",
            "build",
            "wheel",
        ],
    },
    package_data={
        "quiz_judge._store": ["schema.sql"],
    },
    entry_points={
        "console_scripts": [
            "quiz-judge=quiz_judge.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment",
    ],
)
