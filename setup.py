from setuptools import find_packages, setup

"""
# Usage instructions
#
# To install the package
#   'pip install .'
#
# To install with test dependencies
#   'pip install -e .[test]'
"""

INSTALL_REQUIRES = [
    "numpy>=1.24",
    "numba>=0.59",
    "msgspec>=0.18",
]

EXTRAS_REQUIRE = {
    "test": [
        "pytest>=7.4",
    ],
}


setup(
    name="cluster_toolbox",
    version="0.1.0",
    description="Price-profile bar aggregation and auction shape analysis.",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
)
