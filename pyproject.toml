[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xento"
version = "2023.1.0"
description = "Kernel building blocks modelled in Python: heap allocators, a cooperative task executor, RTC and clock arithmetic, PNG scanline decoding and a small JSON library"
requires-python = ">=3.10"
dependencies = []
keywords = ["kernel", "allocator", "executor", "png", "json", "rtc", "osdev"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Multimedia :: Graphics",
    "Topic :: File Formats :: JSON",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
xento-boot = "xento.boot:main"

[tool.hatch.build.targets.wheel]
packages = ["xento"]

[tool.pytest.ini_options]
addopts = "-ra"
