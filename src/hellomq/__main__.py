import typer

from hellomq.consumer.main import app as consumer_app
from hellomq.producer.main import app as producer_app

app = typer.Typer()
app.add_typer(producer_app, name="producer", help="HTTP producer service")
app.add_typer(consumer_app, name="consumer", help="Queue consumer service")

if __name__ == "__main__":
    app()
