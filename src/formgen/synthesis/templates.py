"""
Template table for the Code Synthesizer.

One Jinja2 template per control plus the component skeleton. Templates
use `<< >>`, `<% %>` and `<# #>` delimiters so that JSX braces need no
escaping. Output indentation does not matter: the formatter re-indents
everything afterwards.
"""

import functools
import json
import re
from typing import Any

from jinja2 import DictLoader, Environment, StrictUndefined

from formgen.variants.validators import js_literal

_UNSAFE_ATTR = re.compile(r"[\"\\\n]")
_UNSAFE_TEXT = re.compile(r"[\"'`{}<>&\\\n/()\[\]]")


def jsx_attr(value: Any) -> str:
    """Attribute value: a plain string literal, or an expression when it needs escaping."""
    text = "" if value is None else str(value)
    if _UNSAFE_ATTR.search(text):
        return "{" + json.dumps(text, ensure_ascii=False) + "}"
    return f'"{text}"'


def jsx_text(value: Any) -> str:
    """JSX child text, wrapped in an expression when it has markup characters."""
    text = "" if value is None else str(value)
    if _UNSAFE_TEXT.search(text):
        return "{" + json.dumps(text, ensure_ascii=False) + "}"
    return text


MACROS = """\
<% macro label_tag(f) %><FormLabel><< (f.label or f.name) | jsx_text >><% if f.required %> *<% endif %></FormLabel><% endmacro %>
<% macro description_tag(f) %><% if f.description %><FormDescription><< f.description | jsx_text >></FormDescription><% endif %><% endmacro %>
<% macro disabled_attr(f) %><% if f.disabled %> disabled<% endif %><% endmacro %>
"""

FIELD_OPEN = """\
<FormField
control={form.control}
name=<< name | jsx_attr >>
render={({ field }) => (
"""

FIELD_CLOSE = """\
)}
/>
"""

SIMPLE_CONTROL = """\
<FormItem>
<< label_tag(f) >>
<FormControl>
__CONTROL__
</FormControl>
<< description_tag(f) >>
<FormMessage />
</FormItem>
"""


def _field(body: str) -> str:
    return '<% from "macros" import label_tag, description_tag, disabled_attr %>\n' + FIELD_OPEN + body + FIELD_CLOSE


def _simple(control: str) -> str:
    return _field(SIMPLE_CONTROL.replace("__CONTROL__\n", control))


TEMPLATES: dict[str, str] = {
    "macros": MACROS,
    "input": _simple("""\
<Input
placeholder=<< (f.placeholder or "") | jsx_attr >>
type=<< (f.type or "text") | jsx_attr >>
<< disabled_attr(f) >>
{...field}
/>
"""),
    "textarea": _simple("""\
<Textarea
placeholder=<< (f.placeholder or "") | jsx_attr >>
className="resize-none"
<% if f.rows %>
rows={<< f.rows >>}
<% endif %>
<% if f.max_length %>
maxLength={<< f.max_length >>}
<% endif %>
<< disabled_attr(f) >>
{...field}
/>
"""),
    "password": _simple("""\
<PasswordInput
placeholder=<< (f.placeholder or "") | jsx_attr >>
<< disabled_attr(f) >>
{...field}
/>
"""),
    "phone": _simple("""\
<PhoneInput
placeholder=<< (f.placeholder or "") | jsx_attr >>
defaultCountry=<< country | jsx_attr >>
<< disabled_attr(f) >>
{...field}
/>
"""),
    "checkbox": _field("""\
<FormItem className="flex flex-row items-start space-x-3 space-y-0 rounded-md border p-4">
<FormControl>
<Checkbox
checked={field.value}
onCheckedChange={field.onChange}
<< disabled_attr(f) >>
/>
</FormControl>
<div className="space-y-1 leading-none">
<< label_tag(f) >>
<< description_tag(f) >>
<FormMessage />
</div>
</FormItem>
"""),
    "switch": _field("""\
<FormItem className="flex flex-row items-center justify-between rounded-lg border p-4">
<div className="space-y-0.5">
<< label_tag(f) >>
<< description_tag(f) >>
</div>
<FormControl>
<Switch
checked={field.value}
onCheckedChange={field.onChange}
<< disabled_attr(f) >>
/>
</FormControl>
</FormItem>
"""),
    "select": _field("""\
<FormItem>
<< label_tag(f) >>
<Select onValueChange={field.onChange} defaultValue={field.value}<< disabled_attr(f) >>>
<FormControl>
<SelectTrigger>
<SelectValue placeholder=<< (f.placeholder or "Select an option") | jsx_attr >> />
</SelectTrigger>
</FormControl>
<SelectContent>
<% for option in options %>
<SelectItem value=<< option.value | jsx_attr >>><< option.label | jsx_text >></SelectItem>
<% endfor %>
</SelectContent>
</Select>
<< description_tag(f) >>
<FormMessage />
</FormItem>
"""),
    "multi_select": _simple("""\
<MultiSelector
values={field.value}
onValuesChange={field.onChange}
loop
className="max-w-xs"
>
<MultiSelectorTrigger>
<MultiSelectorInput placeholder=<< (f.placeholder or "Select options") | jsx_attr >> />
</MultiSelectorTrigger>
<MultiSelectorContent>
<MultiSelectorList>
<% for option in options %>
<MultiSelectorItem value=<< option.value | jsx_attr >>><< option.label | jsx_text >></MultiSelectorItem>
<% endfor %>
</MultiSelectorList>
</MultiSelectorContent>
</MultiSelector>
"""),
    "combobox": _field("""\
<FormItem className="flex flex-col">
<< label_tag(f) >>
<Popover>
<PopoverTrigger asChild>
<FormControl>
<Button
variant="outline"
role="combobox"
<< disabled_attr(f) >>
className={cn(
"w-full justify-between",
!field.value && "text-muted-foreground"
)}
>
{field.value
? << options_ident >>.find((option) => option.value === field.value)?.label
: << (f.placeholder or "Select an option") | js >>}
<ChevronsUpDown className="ml-2 h-4 w-4 shrink-0 opacity-50" />
</Button>
</FormControl>
</PopoverTrigger>
<PopoverContent className="w-[200px] p-0">
<Command>
<CommandInput placeholder="Search..." />
<CommandList>
<CommandEmpty>No option found.</CommandEmpty>
<CommandGroup>
{<< options_ident >>.map((option) => (
<CommandItem
value={option.label}
key={option.value}
onSelect={() => {
form.setValue(<< name | js >>, option.value)
}}
>
<Check
className={cn(
"mr-2 h-4 w-4",
option.value === field.value ? "opacity-100" : "opacity-0"
)}
/>
{option.label}
</CommandItem>
))}
</CommandGroup>
</CommandList>
</Command>
</PopoverContent>
</Popover>
<< description_tag(f) >>
<FormMessage />
</FormItem>
"""),
    "date_picker": _field("""\
<FormItem className="flex flex-col">
<< label_tag(f) >>
<Popover>
<PopoverTrigger asChild>
<FormControl>
<Button
variant="outline"
<< disabled_attr(f) >>
className={cn(
"w-full pl-3 text-left font-normal",
!field.value && "text-muted-foreground"
)}
>
{field.value ? (
format(field.value, "PPP")
) : (
<span><< (f.placeholder or "Pick a date") | jsx_text >></span>
)}
<CalendarIcon className="ml-auto h-4 w-4 opacity-50" />
</Button>
</FormControl>
</PopoverTrigger>
<PopoverContent className="w-auto p-0" align="start">
<Calendar
mode="single"
selected={field.value}
onSelect={field.onChange}
disabled={(date) =>
date < new Date(<< from_date | js >>)<% if to_date %> || date > new Date(<< to_date | js >>)<% endif %>

}
initialFocus
/>
</PopoverContent>
</Popover>
<< description_tag(f) >>
<FormMessage />
</FormItem>
"""),
    "datetime_picker": _simple("""\
<DatetimePicker
{...field}
<< disabled_attr(f) >>
format={[
["months", "days", "years"],
["hours", "minutes", "am/pm"]
]}
/>
"""),
    "smart_datetime_input": _simple("""\
<SmartDatetimeInput
value={field.value}
onValueChange={field.onChange}
placeholder=<< (f.placeholder or "e.g. tomorrow at 3pm") | jsx_attr >>
<< disabled_attr(f) >>
/>
"""),
    "file_input": _simple("""\
<FileUploader
value={<< hooks.Files.value >>}
onValueChange={(files) => {
<< hooks.Files.setter >>(files)
field.onChange(files ?? [])
}}
dropzoneOptions={{
maxFiles: << ctx.file_max_count >>,
maxSize: << ctx.file_max_size >>,
multiple: true
}}
className="relative bg-background rounded-lg p-2"
>
<FileInput
id=<< (name ~ "-input") | jsx_attr >>
className="outline-dashed outline-1 outline-slate-500"
>
<div className="flex items-center justify-center flex-col p-8 w-full">
<CloudUpload className="text-gray-500 w-10 h-10" />
<p className="mb-1 text-sm text-gray-500 dark:text-gray-400">
<span className="font-semibold">Click to upload</span>
&nbsp;or drag and drop
</p>
<p className="text-xs text-gray-500 dark:text-gray-400">
Up to << ctx.file_max_count >> files, << max_size_label >> each
</p>
</div>
</FileInput>
<FileUploaderContent>
{<< hooks.Files.value >> &&
<< hooks.Files.value >>.length > 0 &&
<< hooks.Files.value >>.map((file, i) => (
<FileUploaderItem key={i} index={i}>
<Paperclip className="h-4 w-4 stroke-current" />
<span>{file.name}</span>
</FileUploaderItem>
))}
</FileUploaderContent>
</FileUploader>
"""),
    "slider": _field("""\
<FormItem>
<< label_tag(f) >>
<FormControl>
<Slider
min={<< slider.min | js >>}
max={<< slider.max | js >>}
step={<< slider.step | js >>}
defaultValue={[<< default | js >>]}
onValueChange={(vals) => {
field.onChange(vals[0])
}}
<< disabled_attr(f) >>
/>
</FormControl>
<FormDescription>
<% if f.description %>
<< f.description | jsx_text >>
<% endif %>
Selected value is {field.value}
</FormDescription>
<FormMessage />
</FormItem>
"""),
    "signature_input": _simple("""\
<SignatureInput
canvasRef={<< hooks.CanvasRef.value >>}
onSignatureChange={field.onChange}
/>
"""),
    "tags_input": _simple("""\
<TagsInput
value={field.value}
onValueChange={field.onChange}
placeholder=<< (f.placeholder or "Enter your tags") | jsx_attr >>
<% if f.max_tags %>
maxItems={<< f.max_tags >>}
<% endif %>
/>
"""),
    "input_otp": _simple("""\
<InputOTP maxLength={<< length >>} {...field}>
<% for group in otp_groups if group %>
<% if not loop.first %>
<InputOTPSeparator />
<% endif %>
<InputOTPGroup>
<% for index in group %>
<InputOTPSlot index={<< index >>} />
<% endfor %>
</InputOTPGroup>
<% endfor %>
</InputOTP>
"""),
    "location_input": _simple("""\
<LocationSelector
onCountryChange={(country) => {
<< hooks.Country.setter >>(country?.name || "")
form.setValue(<< name | js >>, [country?.name || "", << hooks.State.value >> || ""])
}}
onStateChange={(state) => {
<< hooks.State.setter >>(state?.name || "")
form.setValue(<< name | js >>, [<< hooks.Country.value >> || "", state?.name || ""])
}}
/>
"""),
    "row": """\
<div className="grid grid-cols-12 gap-4">
<% for child in children %>
<div className="col-span-<< span >>">
<< child >>
</div>
<% endfor %>
</div>
""",
    "component": """\
"use client"

<% for line in imports %>
<< line >>
<% endfor %>

<% for const in option_consts %>
const << const.ident >> = [
<% for option in const.options %>
{ label: << option.label | js >>, value: << option.value | js >> },
<% endfor %>
] as const

<% endfor %>
const formSchema = z.object({
<% for key, zod in schema %>
<< key >>: << zod >>,
<% endfor %>
})

export default function << component >>() {
<% for line in hooks %>
<< line >>
<% endfor %>

const form = useForm<z.infer<typeof formSchema>>({
resolver: zodResolver(formSchema),
defaultValues: {
<% for key, value in defaults %>
<< key >>: << value >>,
<% endfor %>
},
})

function onSubmit(values: z.infer<typeof formSchema>) {
try {
console.log(values)
toast(
<pre className="mt-2 w-[340px] rounded-md bg-slate-950 p-4">
<code className="text-white">{JSON.stringify(values, null, 2)}</code>
</pre>
)
} catch (error) {
console.error("Form submission error", error)
toast.error("Failed to submit the form. Please try again.")
}
}

return (
<Form {...form}>
<form onSubmit={form.handleSubmit(onSubmit)} className="space-y-8 max-w-3xl mx-auto py-10">
<% for block in blocks %>
<< block >>
<% endfor %>
<Button type="submit">Submit</Button>
</form>
</Form>
)
}
""",
}


@functools.lru_cache(maxsize=1)
def template_environment() -> Environment:
    """Jinja2 environment over the template table."""
    env = Environment(
        loader=DictLoader(TEMPLATES),
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        block_start_string="<%",
        block_end_string="%>",
        variable_start_string="<<",
        variable_end_string=">>",
        comment_start_string="<#",
        comment_end_string="#>",
    )
    env.filters["js"] = js_literal
    env.filters["jsx_attr"] = jsx_attr
    env.filters["jsx_text"] = jsx_text
    return env


def render(template_name: str, **context: Any) -> str:
    return template_environment().get_template(template_name).render(**context)
