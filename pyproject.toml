[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "peptide_geom"
version = "0.1.0"
description = "Peptide geometry: bond vectors, dihedral angles, side-chain torsions and hydrogen placement from atomic coordinates"
requires-python = ">=3.10"
dependencies = []
keywords = ["protein", "peptide", "dihedral", "hydrogen", "molecular geometry", "amino acid"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Chemistry",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["peptide_geom"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
