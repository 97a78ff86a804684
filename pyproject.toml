[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sgkit"
version = "0.1.0"
description = "Small 3D math toolkit (vectors, matrices, quaternions, bounding volumes) with textured-font layout and TXF font loading"
requires-python = ">=3.10"
dependencies = []
keywords = ["3d", "geometry", "quaternion", "matrix", "frustum", "txf", "font", "texture"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Games/Entertainment",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["sgkit"]

[tool.pytest.ini_options]
addopts = "-ra"
