from setuptools import setup, find_packages

setup(
    name="dnsswitcher",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    package_data={"dnsswitcher": ["dnsswitcher.default.json"]},
    install_requires=[
        "click",
        "toml",
        # The menu-bar app only runs on macOS; the CLI and profile store do not need it
        "rumps; sys_platform == 'darwin'",
        "pyobjc-framework-Cocoa; sys_platform == 'darwin'",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "dnsswitcher=dnsswitcher.cli:main",
            "dnsswitcher-app=dnsswitcher.app:main",
        ],
    },
    python_requires=">=3.9",
    description="Switch between DNS server profiles from the macOS menu bar",
    long_description="A menu-bar utility that applies named sets of DNS servers to a network service using networksetup.",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: MacOS X",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Networking",
    ],
)
