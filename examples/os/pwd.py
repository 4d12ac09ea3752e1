def setup(bot):
    (bot.command("pwd")
        .description("print name of current/working directory")
        .action(lambda metadata, options: bot.send(metadata, metadata["cwd"])))
