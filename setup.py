from setuptools import setup, find_packages

setup(
    name="netmenu",
    version="0.1.0",
    packages=find_packages(include=["netmenu", "netmenu.*"]),
    include_package_data=True,
    install_requires=[
        "click",
        "toml",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "netmenu=netmenu.cli:cli",
        ],
    },
    python_requires=">=3.9",
    author="NetMenu Contributors",
    description="One dmenu-style menu for VPN exit nodes, Wi-Fi, Bluetooth and custom actions",
    long_description="A Linux utility that gathers Tailscale/Mullvad exit nodes, Wi-Fi networks, paired Bluetooth devices and user-defined shell actions into a single picker and runs the chosen one.",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: X11 Applications",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Networking",
        "Topic :: System :: Systems Administration",
    ],
)
