from .__main__ import app, main
