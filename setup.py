from setuptools import find_packages, setup

setup(
    name="update-versions",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={
        "update_versions.sync": ["templates/*.tmpl"],
    },
    python_requires=">=3.10",
    install_requires=[
        "requests",
        "PyYAML",
        "platformdirs",
        "packaging",
        "rich",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "update-versions=update_versions.cli:main",
        ],
    },
)
