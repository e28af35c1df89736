"""Setup package for building"""

import setuptools

setuptools.setup(
    name="lans2py",
    version="0.3.0",
    description="Load, transform and plot NanoSIMS data exported from LANS.",
    license="GPL-3.0-only",
    python_requires=">=3.10",
    packages=setuptools.find_packages(include=["lans2py", "lans2py.*"]),
    package_data={"lans2py": ["*.yaml"]},
    include_package_data=True,
    install_requires=[
        "matplotlib",
        "numpy",
        "pandas",
        "pyyaml",
        "ruamel.yaml",
        "schema",
        "seaborn",
        "tqdm",
    ],
    extras_require={
        "tests": [
            "pytest",
            "pytest-cov",
        ],
    },
    entry_points={
        "console_scripts": [
            "lans2py = lans2py.entry_point:entry_point",
        ],
    },
)
