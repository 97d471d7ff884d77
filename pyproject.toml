[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cliffordscope"
version = "0.1.0"
description = "Render density images of Clifford strange attractors with parallel samplers and tone scaling."
requires-python = ">=3.10"
keywords = ["clifford", "attractor", "chaos", "strange attractor", "density map", "visualization", "generative art"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: End Users/Desktop",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Artistic Software",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Scientific/Engineering :: Visualization",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cliffordscope = "cliffordscope.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["cliffordscope"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
