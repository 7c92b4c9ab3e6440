from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="xkcd-wallpaper",
    version="1.0.0",
    author="xkcd-wallpaper contributors",
    description="Turn xkcd comics into desktop wallpapers with a recolored background",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["xkcd_wallpaper", "xkcd_wallpaper.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Graphics :: Graphics Conversion",
        "Topic :: Desktop Environment",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "xkcd-wallpaper=xkcd_wallpaper.cli.main:main",
            "xkcd-wallpaper-api=xkcd_wallpaper.api_server:main",
        ],
    },
)
