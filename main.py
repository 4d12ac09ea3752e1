import os.path
import re

from rich.console import Console

from commandeer import Command

__prog__ = "commandeer"

console = Console()

bot = Command()
bot.set_send(lambda metadata, text: console.print(text, markup=False, highlight=False))

bot.load(os.path.join(os.path.dirname(os.path.abspath(__file__)), "examples", "os"))

(bot.command("copy <file> <dest>")
    .description("Copy file to dest")
    .action(lambda metadata, file, dest, options: bot.send(metadata, f"Copying file {file} to {dest}")))


def pizza(metadata, options):
    order = f"You ordered a {options['size']} pizza"
    if options["drink"] is True:
        order += " with a random drink"
    elif options["drink"]:
        order += f" with a cup of {options['drink']}"
    return bot.send(metadata, order)


(bot.command("pizza")
    .option("-s, --size <size>", "Pizza size", re.compile(r"^(large|medium|small)$", re.I), "medium")
    .option("-d, --drink [drink]", "Drink", re.compile(r"^(coke|pepsi|izze)$", re.I))
    .description("Order your pizza")
    .action(pizza))

(bot.command("nohelp", no_help=True)
    .description("hidden command")
    .action(lambda metadata, options: bot.send(metadata, "It works!!")))

sub = bot.command("sub <command>").description("Subcommand")

(sub.command("echo <echo>")
    .description("echo command")
    .action(lambda metadata, echo, options: bot.send(metadata, echo)))

(sub.command("hello [name]")
    .description("hello command")
    .action(lambda metadata, name, options: bot.send(metadata, f"Hello {name}" if name else "Hello world!")))


def leave(metadata, options):
    raise SystemExit(0)


(bot.command("exit")
    .alias("quit")
    .description("Exit program")
    .action(leave))


if __name__ == '__main__':
    metadata = {"cwd": os.getcwd()}
    try:
        while True:
            bot.parse(console.input("> "), metadata)
    except (EOFError, KeyboardInterrupt):
        pass
    console.print("Have a great day!")
