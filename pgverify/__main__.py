from pgverify.cli.main import run

run()
