def setup(bot):
    bot.command("second").action(lambda metadata, options: bot.send(metadata, "second"))
