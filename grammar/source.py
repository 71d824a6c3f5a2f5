# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Named source text, with line lookup and caret diagnostics for token slices.
'''

from bisect import bisect_right


class Source:

  def __init__(self, name:str, text:str, *, show_missing_newline:bool=True) -> None:
    assert isinstance(text, str)
    self.name = name
    self.text = text
    self.show_missing_newline = show_missing_newline
    self.newline_positions:list[int] = []


  def __repr__(self) -> str:
    return f'{self.__class__.__name__}({self.name!r}, text=<str[{len(self.text)}]>)'


  def __getitem__(self, slc:slice) -> str:
    return self.text[slc]


  def update_line_positions(self, pos:int) -> None:
    'Lazily update newline positions array up to `pos`. `pos` must be less than or equal to the text length.'
    start = self.newline_positions[-1] + 1 if self.newline_positions else 0
    for i in range(start, pos):
      if self.text[i] == '\n': self.newline_positions.append(i)


  def get_line_index(self, pos:int) -> int:
    text = self.text
    length = len(text)
    if not (0 <= pos <= length): raise IndexError(pos)
    self.update_line_positions(pos)
    if pos == length:
      newline_count = len(self.newline_positions)
      return (newline_count - 1) if text.endswith('\n') else newline_count
      #^ The end-of-text position does not get a line index beyond the last line.
    return bisect_right(self.newline_positions, pos)


  def get_line_start(self, pos:int) -> int:
    'Return the character index for the start of the line containing `pos`.'
    text = self.text
    if pos == len(text) and text.endswith('\n'): pos -= 1
    return text.rfind('\n', 0, pos) + 1 # rfind returns -1 for no match, so just add one.


  def get_line_end(self, pos:int) -> int:
    '''
    Return the character index for the end of the line containing `pos`;
    a newline is considered the final character of a line.
    '''
    newline_pos = self.text.find('\n', pos)
    return len(self.text) if newline_pos == -1 else newline_pos + 1


  def diagnostic(self, slc:slice, msg:str='') -> str:
    'Format `msg` with the location of `slc` and the source line, underlined. Multiline slices show the first line.'
    pos = slc.start
    line_pos = self.get_line_start(pos)
    line_end = self.get_line_end(pos)
    end = min(slc.stop, line_end)
    line_idx = self.get_line_index(pos)
    line_str = self.text[line_pos:line_end]

    if line_str.endswith('\n'):
      src_line = line_str[:-1]
      if pos == len(line_str) - 1 + line_pos or end == line_end:
        src_line += '⏎' # RETURN SYMBOL.
    elif self.show_missing_newline:
      src_line = line_str + '⏎͓' # RETURN SYMBOL, COMBINING X BELOW.
    else:
      src_line = line_str

    under_chars = ['\t' if char == '\t' else ' ' for char in line_str[:pos-line_pos]]
    if pos >= end: under_chars.append('^')
    else: under_chars.extend('~' for _ in range(pos, end))
    underline = ''.join(under_chars)

    col = f'{pos-line_pos+1}-{end-line_pos+1}' if pos < end else str(pos-line_pos+1)
    name_colon = (self.name + ':') if self.name else ''
    msg_space = ' ' if msg else ''
    src_bar = '| ' if src_line else '|'
    return f'{name_colon}{line_idx+1}:{col}:{msg_space}{msg}\n{src_bar}{src_line}\n  {underline}\n'
