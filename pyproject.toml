[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "clayutils"
version = "0.1.0"
description = "Vector, quaternion and 4x4 matrix maths for XR rendering, with file, image and debug-message helpers"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["graphics", "xr", "vr", "matrix", "quaternion", "projection", "rendering"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["clayutils"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
