# Copyright 2024 inuex35
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Setup script for pysp3 library"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

requirements = [
    "numpy>=1.19.0",
    "scipy>=1.5.0",
    "pandas>=1.5.0",
    "pyyaml>=5.3",
]

setup(
    name="pysp3",
    version="1.0.0",
    author="PyINS Development Team",
    description="SP3 precise orbit conversion with TRF/CRF and CM2CE corrections",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/inuex35/pysp3",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"pysp3.models": ["data/*.yaml"]},
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Scientific/Engineering",
        "Topic :: Scientific/Engineering :: Astronomy",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={"test": ["pytest>=6.0"]},
    entry_points={
        "console_scripts": [
            "sp3-to-orbit=pysp3.cli:main",
        ],
    },
    include_package_data=True,
    keywords="GNSS SP3 orbit precise ephemeris geodesy",
)
