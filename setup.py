from setuptools import setup, find_packages

setup(
    name="orbrya",
    version="0.1.0",
    description="Dockable panel layout engine for the Orbrya code-fixing IDE",
    author="Orbrya team",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "PyQt5>=5.15"
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "gui_scripts": [
            "orbrya = orbrya.__main__:main"
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Framework :: PyQt5"
    ],
)
