[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sshbrowser"
version = "0.1.0"
description = "Browse, preview, rename and upload files on a remote host over a plain SSH connection"
requires-python = ">=3.10"
keywords = ["ssh", "file browser", "remote files", "base64", "tkinter", "paramiko"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: File Transfer Protocol (FTP)",
    "Topic :: System :: Systems Administration",
]
dependencies = [
    "paramiko",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sshbrowser = "sshbrowser.gui:main"

[tool.hatch.build.targets.wheel]
packages = ["sshbrowser"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
