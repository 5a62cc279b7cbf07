from scribeboard import create_app

app = create_app()
