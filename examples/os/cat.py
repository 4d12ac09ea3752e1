"""
cat [file...]: print files relative to metadata["cwd"], one message per file.
"""
import os


def _format(lines, options):
    if options["squeezeBlank"]:
        lines = [
            line for index, line in enumerate(lines)
            if not (index > 0 and not line.strip() and not lines[index - 1].strip())
        ]
    formatted = []
    counter = 0
    for index, line in enumerate(lines, start=1):
        if options["showEnds"]:
            line += "$"
        if options["number"]:
            line = f"{index} {line}"
        elif options["numberNonblank"] and line.strip():
            counter += 1
            line = f"{counter} {line}"
        formatted.append(line)
    return "\n".join(formatted)


def setup(bot):
    def cat(metadata, files, options):
        outcome = None
        for file in files:
            with open(os.path.join(metadata["cwd"], file), encoding="utf-8") as stream:
                outcome = bot.send(metadata, _format(stream.read().splitlines(), options))
        return outcome

    (bot.command("cat [file...]")
        .description("concatenate files and print on the standard output")
        .option("-b, --number-nonblank", "number nonempty output lines")
        .option("-E, --show-ends", "display $ at end of each line")
        .option("-n, --number", "number all output lines")
        .option("-s, --squeeze-blank", "suppress repeated empty output lines")
        .action(cat))
