[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jpegl"
version = "0.1.0"
description = "Lossless JPEG (JPEGL) headers, Huffman tables, prediction and decoding of non-interleaved component planes"
requires-python = ">=3.10"
dependencies = []
keywords = ["jpeg", "lossless", "jpegl", "huffman", "image", "compression", "jfif"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
    "Topic :: System :: Archiving :: Compression",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["jpegl"]

[tool.hatch.build.targets.sdist]
include = ["jpegl", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
