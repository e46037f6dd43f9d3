"""
Venue error code tables.

``EXACT_ERRORS`` maps top-level ``code`` and per-item ``sCode`` values to an
exception class; ``BROAD_ERRORS`` maps message substrings for free-text
failures that carry no recognizable code. Both are read-only mappings built
once at import.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Type

from .errors import (
    AccountNotEnabled,
    AccountSuspended,
    AuthenticationError,
    BadRequest,
    BadSymbol,
    CancelPending,
    DuplicateOrderId,
    ExchangeError,
    ExchangeNotAvailable,
    InsufficientFunds,
    InvalidNonce,
    InvalidOrder,
    NetworkError,
    NotSupported,
    OkxError,
    OnMaintenance,
    OrderNotFound,
    PermissionDenied,
    RateLimitExceeded,
    RequestTimeout,
    RestrictedLocation,
)

_EXACT: Dict[str, Type[OkxError]] = {
    # Public
    "1": ExchangeError,  # operation failed
    "2": ExchangeError,  # bulk operation partially succeeded
    "50000": BadRequest,  # body can not be empty
    "50001": OnMaintenance,  # service temporarily unavailable
    "50002": BadRequest,  # json data format error
    "50004": RequestTimeout,  # endpoint request timeout
    "50005": ExchangeNotAvailable,  # API is offline or unavailable
    "50006": BadRequest,  # invalid Content_Type
    "50007": AccountSuspended,  # account blocked
    "50008": AuthenticationError,  # user does not exist
    "50009": AccountSuspended,  # account is suspended due to ongoing liquidation
    "50010": ExchangeError,  # user ID can not be empty
    "50011": RateLimitExceeded,  # request too frequent
    "50012": ExchangeError,  # account status invalid
    "50013": ExchangeNotAvailable,  # system is busy
    "50014": BadRequest,  # parameter can not be empty
    "50015": ExchangeError,  # either parameter is required
    "50016": ExchangeError,  # parameter does not match
    "50017": ExchangeError,  # position frozen due to ADL
    "50018": ExchangeError,  # currency frozen due to ADL
    "50019": ExchangeError,  # account frozen due to ADL
    "50020": ExchangeError,  # position frozen due to liquidation
    "50021": ExchangeError,  # currency frozen due to liquidation
    "50022": ExchangeError,  # account frozen due to liquidation
    "50023": ExchangeError,  # funding fee frozen
    "50024": BadRequest,  # parameters cannot both exist
    "50025": ExchangeError,  # parameter count exceeds the limit
    "50026": ExchangeNotAvailable,  # system error, try again later
    "50027": PermissionDenied,  # account restricted from trading
    "50028": ExchangeError,  # unable to take the order
    "50029": ExchangeError,  # account triggered risk control
    "50030": PermissionDenied,  # illegal request
    "50032": AccountSuspended,  # asset is blocked
    "50033": AccountSuspended,  # instrument blocked
    "50035": BadRequest,  # endpoint requires client id
    "50036": BadRequest,  # invalid expTime
    "50037": BadRequest,  # order expired
    "50038": ExchangeError,  # not supported in demo trading
    "50039": ExchangeError,  # timestamp pagination not supported
    "50040": RateLimitExceeded,  # too frequent operations
    "50041": ExchangeError,  # user not whitelisted
    "50044": BadRequest,  # invalid request type
    "50047": ExchangeError,  # instrument expired or delisted
    "50048": ExchangeError,  # instrument switched over
    "50049": ExchangeError,  # no information on the position tier
    "50050": ExchangeError,  # options trading already activated
    "50051": ExchangeError,  # options trading not available
    "50052": ExchangeError,  # activation requires more assets
    "50053": ExchangeError,  # sub-account cannot be activated
    # API Class
    "50100": ExchangeError,  # API frozen
    "50101": AuthenticationError,  # API key does not match current environment
    "50102": InvalidNonce,  # timestamp request expired
    "50103": AuthenticationError,  # OK-ACCESS-KEY can not be empty
    "50104": AuthenticationError,  # OK-ACCESS-PASSPHRASE can not be empty
    "50105": AuthenticationError,  # OK-ACCESS-PASSPHRASE incorrect
    "50106": AuthenticationError,  # OK-ACCESS-SIGN can not be empty
    "50107": AuthenticationError,  # OK-ACCESS-TIMESTAMP can not be empty
    "50108": ExchangeError,  # exchange ID does not exist
    "50109": ExchangeError,  # exchange domain does not exist
    "50110": PermissionDenied,  # invalid IP
    "50111": AuthenticationError,  # invalid OK-ACCESS-KEY
    "50112": AuthenticationError,  # invalid OK-ACCESS-TIMESTAMP
    "50113": AuthenticationError,  # invalid signature
    "50114": AuthenticationError,  # invalid authorization
    "50115": BadRequest,  # invalid request method
    "50116": PermissionDenied,  # API key bound to other IPs
    "50118": PermissionDenied,  # broker API key not linked
    "50119": AuthenticationError,  # API key does not exist
    "50120": PermissionDenied,  # API key has no permission
    "50121": PermissionDenied,  # access from this IP not allowed
    "50122": ExchangeError,  # order amount exceeds API limit
    # Trade Class
    "51000": BadRequest,  # parameter error
    "51001": BadSymbol,  # instrument ID does not exist
    "51002": BadSymbol,  # instrument ID does not match underlying index
    "51003": BadRequest,  # either client order ID or order ID is required
    "51004": InvalidOrder,  # order amount exceeds current tier limit
    "51005": InvalidOrder,  # order amount exceeds the limit
    "51006": InvalidOrder,  # order price out of the limit
    "51007": InvalidOrder,  # order amount less than one contract
    "51008": InsufficientFunds,  # insufficient balance
    "51009": AccountSuspended,  # order placement blocked
    "51010": AccountNotEnabled,  # not supported in current account mode
    "51011": DuplicateOrderId,  # duplicated order ID
    "51012": BadSymbol,  # token does not exist
    "51014": BadSymbol,  # index does not exist
    "51015": BadSymbol,  # instrument ID does not match instrument type
    "51016": DuplicateOrderId,  # duplicated client order ID
    "51017": ExchangeError,  # borrow amount exceeds the limit
    "51018": ExchangeError,  # user with option account cannot hold net short positions
    "51019": ExchangeError,  # no net long positions can be held under isolated margin
    "51020": InvalidOrder,  # order amount should be greater than the min available amount
    "51021": ExchangeError,  # contract to be listed
    "51022": ExchangeError,  # contract suspended
    "51023": ExchangeError,  # position does not exist
    "51024": AccountSuspended,  # trading account is blocked
    "51025": ExchangeError,  # order count exceeds the limit
    "51026": BadSymbol,  # instrument type does not match underlying index
    "51027": BadSymbol,  # contract expired
    "51028": BadSymbol,  # contract under delivery
    "51029": BadSymbol,  # contract is being settled
    "51030": InvalidOrder,  # funding fee is being settled
    "51031": InvalidOrder,  # order price not within close-out price range
    "51032": InvalidOrder,  # closing all positions at market price
    "51033": InvalidOrder,  # total amount exceeds single order limit
    "51037": InvalidOrder,  # only reduce-only orders allowed in current mode
    "51038": InvalidOrder,  # IOC order already pending on same side
    "51039": PermissionDenied,  # PM account cannot hold long/short positions
    "51040": InvalidOrder,  # cannot adjust margins for long isolated options
    "51041": InvalidOrder,  # portfolio margin account only supports net mode
    "51042": InvalidOrder,  # portfolio margin account only supports cross margin
    "51043": InvalidOrder,  # isolated position does not exist
    "51044": InvalidOrder,  # order type not allowed for this instrument
    "51046": InvalidOrder,  # take profit trigger price must exceed order price
    "51047": InvalidOrder,  # stop loss trigger price must be below order price
    "51048": InvalidOrder,  # take profit trigger price must be below order price
    "51049": InvalidOrder,  # stop loss trigger price must exceed order price
    "51050": InvalidOrder,  # take profit trigger price must exceed best ask
    "51051": InvalidOrder,  # stop loss trigger price must be below best ask
    "51052": InvalidOrder,  # take profit trigger price must be below best bid
    "51053": InvalidOrder,  # stop loss trigger price must exceed best bid
    "51054": BadRequest,  # getting information timed out
    "51055": InvalidOrder,  # futures grid not available in portfolio margin
    "51056": InvalidOrder,  # action not allowed
    "51057": InvalidOrder,  # bot not available in current account mode
    "51058": InvalidOrder,  # no available position for this algo order
    "51059": InvalidOrder,  # strategy for the current state does not support this operation
    "51100": InvalidOrder,  # trading amount does not meet the min tradable amount
    "51101": InvalidOrder,  # entered amount exceeds the max pending order amount
    "51102": InvalidOrder,  # entered amount exceeds the max pending count
    "51103": InvalidOrder,  # entered amount exceeds the max pending order count of the underlying
    "51104": InvalidOrder,  # entered amount exceeds the max pending order amount of the underlying
    "51105": InvalidOrder,  # entered amount exceeds the max order amount
    "51106": InvalidOrder,  # entered amount exceeds the max order amount of the underlying
    "51107": InvalidOrder,  # entered amount exceeds the max holding amount
    "51108": InvalidOrder,  # positions exceed the limit for closing out with market price
    "51109": InvalidOrder,  # no available offer
    "51110": InvalidOrder,  # can only place a limit order after call auction started
    "51111": BadRequest,  # maximum number of orders placed in bulk exceeded
    "51112": InvalidOrder,  # close order size exceeds your available size
    "51113": RateLimitExceeded,  # market-price liquidation requests too frequent
    "51115": InvalidOrder,  # cancel all pending close-orders before liquidation
    "51116": InvalidOrder,  # order price or trigger price exceeds the limit
    "51117": InvalidOrder,  # pending close-orders exceed the limit
    "51118": InvalidOrder,  # total amount should exceed the min amount per order
    "51119": InsufficientFunds,  # order placement failed due to insufficient balance
    "51120": InvalidOrder,  # order quantity less than the min
    "51121": InvalidOrder,  # order count should be an integer multiple of the lot size
    "51122": InvalidOrder,  # order price must be higher than the min price
    "51124": InvalidOrder,  # you can only place limit orders during price limit
    "51125": InvalidOrder,  # currently there are reduce + reverse position pending orders
    "51126": InvalidOrder,  # currently there are reduce only pending orders
    "51127": InsufficientFunds,  # available balance is 0
    "51128": InvalidOrder,  # multi-currency margin account can not do cross-margin trading
    "51129": InvalidOrder,  # value of position and orders has reached the limit
    "51130": BadSymbol,  # fixed margin currency error
    "51131": InsufficientFunds,  # insufficient balance
    "51132": InvalidOrder,  # your position amount is negative
    "51133": InvalidOrder,  # reduce-only feature unavailable for spot in cross margin
    "51134": InvalidOrder,  # closing position failed, check holdings
    "51135": InvalidOrder,  # closing price triggered the limit
    "51136": InvalidOrder,  # closing amount triggered the limit
    "51137": InvalidOrder,  # highest buy price reached
    "51138": InvalidOrder,  # lowest sell price reached
    "51139": InvalidOrder,  # reduce-only feature unavailable for the spot transactions
    "51143": InvalidOrder,  # no available quote
    "51147": InvalidOrder,  # options trading needs to be activated
    "51148": InvalidOrder,  # reduce-only cannot increase position quantity
    "51149": InvalidOrder,  # order timed out, try again later
    "51150": InvalidOrder,  # precision of the number of trades or price exceeds the limit
    "51152": InvalidOrder,  # unable to place an order that mixes auto-borrow with others
    "51153": InvalidOrder,  # unable to borrow manually in auto borrow mode
    "51154": InvalidOrder,  # unable to place an order, auto borrow not supported
    "51155": RestrictedLocation,  # restricted due to local compliance requirements
    "51156": InvalidOrder,  # cannot place orders to close out long/short positions
    "51157": InvalidOrder,  # cannot place orders to close out net positions
    "51158": InvalidOrder,  # one-way buy mode, cannot sell
    "51159": InvalidOrder,  # one-way sell mode, cannot buy
    "51160": InvalidOrder,  # max leverage reached
    "51162": InvalidOrder,  # quantity exceeds the max of the instrument
    "51163": InvalidOrder,  # hold a position in the opposite direction
    "51165": InvalidOrder,  # reduce-only orders exceed the position
    "51166": InvalidOrder,  # currency does not support auto borrow
    "51174": InvalidOrder,  # pending orders exceed the limit
    "51185": InvalidOrder,  # max order price exceeded
    "51201": InvalidOrder,  # value of per market order cannot exceed the limit
    "51202": InvalidOrder,  # market-order amount exceeds the max amount
    "51203": InvalidOrder,  # order amount exceeds the limit
    "51204": InvalidOrder,  # price for limit order can not be empty
    "51205": InvalidOrder,  # reduce-only is not available
    "51206": InvalidOrder,  # cancel the reduce-only order before placing this order
    "51220": InvalidOrder,  # share only supported for filled orders
    "51221": InvalidOrder,  # profit-sharing ratio out of range
    "51222": InvalidOrder,  # profit sharing only supports instant trigger
    "51223": InvalidOrder,  # lead trader can only place subposition
    "51224": InvalidOrder,  # currency not supported for profit sharing
    # Algo orders
    "51250": InvalidOrder,  # algo order price out of the available range
    "51251": InvalidOrder,  # algo order type error
    "51252": InvalidOrder,  # algo order amount out of the available range
    "51253": InvalidOrder,  # average amount exceeds the limit per iceberg order
    "51254": InvalidOrder,  # iceberg average amount error
    "51255": InvalidOrder,  # limit of per iceberg order: total amount/1000 < x <= total amount
    "51256": InvalidOrder,  # iceberg order price variance error
    "51257": InvalidOrder,  # trail order callback rate error
    "51258": InvalidOrder,  # trail sell order price must be higher than the last price
    "51259": InvalidOrder,  # trail buy order price must be lower than the last price
    "51260": InvalidOrder,  # max of trail orders reached
    "51261": InvalidOrder,  # max of pending TP/SL orders reached
    "51262": InvalidOrder,  # max of iceberg orders reached
    "51263": InvalidOrder,  # max of time-weighted orders reached
    "51264": InvalidOrder,  # average amount exceeds the limit per time-weighted order
    "51265": InvalidOrder,  # time-weighted order limit error
    "51267": InvalidOrder,  # time-weighted order strategy initiative rate error
    "51268": InvalidOrder,  # time-weighted order strategy initiative range error
    "51269": InvalidOrder,  # time-weighted order interval error
    "51270": InvalidOrder,  # time-weighted order limit price range error
    "51271": InvalidOrder,  # sweep ratio must be between 0 and 100
    "51272": InvalidOrder,  # price variance must be between 0 and 1
    "51273": InvalidOrder,  # total amount must exceed the order amount
    "51274": InvalidOrder,  # total quantity of time-weighted order must exceed single order limit
    "51275": InvalidOrder,  # stop price of TP/SL must be set for the single order
    "51276": InvalidOrder,  # stop market orders cannot specify a price
    "51277": InvalidOrder,  # TP trigger price cannot be higher than the last price
    "51278": InvalidOrder,  # SL trigger price cannot be lower than the last price
    "51279": InvalidOrder,  # TP trigger price cannot be lower than the last price
    "51280": InvalidOrder,  # SL trigger price cannot be higher than the last price
    "51281": InvalidOrder,  # trigger not supported for the instrument
    "51282": InvalidOrder,  # range of trigger price exceeds the limit
    "51283": InvalidOrder,  # time interval must be positive
    "51284": InvalidOrder,  # algo count exceeds the limit
    "51285": InvalidOrder,  # callback ratio or spread required
    "51286": InvalidOrder,  # trigger price type not supported
    "51288": InvalidOrder,  # bot is stopping
    "51289": InvalidOrder,  # bot configuration does not exist
    "51290": InvalidOrder,  # bot engine is being upgraded
    "51291": InvalidOrder,  # bot does not exist or has stopped
    "51292": InvalidOrder,  # bot type does not exist
    "51293": InvalidOrder,  # bot does not exist
    "51294": InvalidOrder,  # bot cannot be created temporarily
    "51299": InvalidOrder,  # order did not go through, max orders reached
    "51300": InvalidOrder,  # TP trigger price cannot be higher than the last price
    "51302": InvalidOrder,  # SL trigger price cannot be lower than the last price
    "51303": InvalidOrder,  # TP trigger price cannot be lower than the last price
    "51304": InvalidOrder,  # SL trigger price cannot be higher than the last price
    "51305": InvalidOrder,  # TP trigger price cannot be higher than the index price
    "51306": InvalidOrder,  # SL trigger price cannot be lower than the index price
    "51307": InvalidOrder,  # TP trigger price cannot be lower than the index price
    "51308": InvalidOrder,  # SL trigger price cannot be higher than the index price
    "51309": InvalidOrder,  # cannot create trading bot during call auction
    "51310": InvalidOrder,  # strategic orders with iceberg and twap not supported for isolated
    "51311": InvalidOrder,  # move order stop not supported for isolated
    "51312": InvalidOrder,  # strategy not supported for isolated mode
    "51313": InvalidOrder,  # manual transfer in isolated mode does not support bot trading
    "51317": InvalidOrder,  # trigger orders not available in margin
    "51327": InvalidOrder,  # closeFraction only available for futures and swap
    "51328": InvalidOrder,  # closeFraction only available for reduceOnly or close
    "51329": InvalidOrder,  # closeFraction only available in net mode
    "51330": InvalidOrder,  # closeFraction only available for stop market
    "51331": InvalidOrder,  # closeFraction only available for close position
    "51332": InvalidOrder,  # closeFraction must be 1
    "51340": InvalidOrder,  # used margin must be greater than the minimum
    "51341": InvalidOrder,  # position closing not allowed
    "51342": InvalidOrder,  # closing order already exists
    "51343": InvalidOrder,  # TP price must be less than the lower price
    "51344": InvalidOrder,  # SL price must be greater than the upper price
    "51345": InvalidOrder,  # policy type is not grid policy
    "51346": InvalidOrder,  # highest price cannot be lower than the lowest price
    "51347": InvalidOrder,  # no profit available
    "51348": InvalidOrder,  # stop loss price should be less than the lower price
    "51349": InvalidOrder,  # take profit price should be greater than the highest price
    "51350": InvalidOrder,  # no recommended parameters
    "51351": InvalidOrder,  # single income must be greater than 0
    # Cancel / amend
    "51400": OrderNotFound,  # cancellation failed as the order does not exist
    "51401": OrderNotFound,  # cancellation failed as the order is already canceled
    "51402": OrderNotFound,  # cancellation failed as the order is already completed
    "51403": InvalidOrder,  # cancellation failed as the order type does not support cancellation
    "51404": InvalidOrder,  # order cancellation unavailable during second phase of call auction
    "51405": ExchangeError,  # cancellation failed as you do not have any pending orders
    "51406": ExchangeError,  # canceled - order count exceeds the limit
    "51407": BadRequest,  # either order ID or client order ID is required
    "51408": ExchangeError,  # pair ID or name does not match the order info
    "51409": ExchangeError,  # either pair ID or pair name ID is required
    "51410": CancelPending,  # cancellation failed as the order is already under cancelling status
    "51411": AccountSuspended,  # account does not have permission for mass cancellation
    "51412": ExchangeError,  # cancellation timed out
    "51413": ExchangeError,  # cancellation failed as the order type is not supported
    "51415": ExchangeError,  # unable to place order, spot trading only supports limit orders
    "51500": ExchangeError,  # either order price or amount is required
    "51501": ExchangeError,  # maximum number of order modifications exceeded
    "51502": InsufficientFunds,  # order modification failed for insufficient margin
    "51503": OrderNotFound,  # order modification failed as the order does not exist
    "51506": ExchangeError,  # order modification unavailable for the order type
    "51508": ExchangeError,  # orders are not allowed to be modified during call auction
    "51509": ExchangeError,  # modification failed as the order has been canceled
    "51510": ExchangeError,  # modification failed as the order has been completed
    "51511": ExchangeError,  # operation failed as the order price did not meet the tick size
    "51512": ExchangeError,  # failed to amend orders in batches
    "51513": ExchangeError,  # number of modification requests exceeds the limit
    "51514": ExchangeError,  # order modification failed as the price length exceeds the limit
    "51600": ExchangeError,  # status not found
    "51601": ExchangeError,  # order status and order ID cannot exist at the same time
    "51602": ExchangeError,  # either order status or order ID is required
    "51603": OrderNotFound,  # order does not exist
    "51732": AuthenticationError,  # required user KYC level not met
    "51733": AuthenticationError,  # borrow failed, user under liquidation
    "51734": AuthenticationError,  # borrow failed, currency not supported
    "51735": ExchangeError,  # sub-account is not supported
    "51736": InsufficientFunds,  # insufficient balance for repayment
    # Data class
    "52000": ExchangeError,  # no updates
    # SPOT/MARGIN error codes
    "54000": ExchangeError,  # margin transactions unavailable
    "54001": ExchangeError,  # only multi-currency margin account can be set to borrow coins automatically
    "54008": InvalidOrder,  # operation failed, MMP triggered
    "54009": InvalidOrder,  # range of mmp frozen interval exceeds the limit
    "54011": InvalidOrder,  # 200% pre-order collateral requirement not met
    # Trading bot
    "55100": InvalidOrder,  # take profit % should be within the range
    "55101": InvalidOrder,  # stop loss % should be within the range
    "55102": InvalidOrder,  # take profit % should be greater than the current bot PnL %
    "55103": InvalidOrder,  # stop loss % should be less than the current bot PnL %
    "55104": InvalidOrder,  # only futures grid supports take profit or stop loss based on PnL %
    "55111": InvalidOrder,  # this signal name is in use
    "55112": InvalidOrder,  # this signal does not exist
    "55113": InvalidOrder,  # create signal strategies with leverage greater than max
    # Funding
    "58000": ExchangeError,  # account type does not support internal transfers
    "58001": AuthenticationError,  # incorrect trade password
    "58002": PermissionDenied,  # please activate savings account first
    "58003": ExchangeError,  # currency type is not supported by savings account
    "58004": AccountSuspended,  # account blocked
    "58005": ExchangeError,  # redeem/purchase amount exceeds the limit
    "58006": ExchangeError,  # service unavailable for this token
    "58007": ExchangeError,  # abnormal assets interface, try again later
    "58100": ExchangeError,  # trading account is being processed
    "58101": AccountSuspended,  # transfer suspended
    "58102": RateLimitExceeded,  # too frequent transfer
    "58103": ExchangeError,  # parent account user id does not match sub-account user id
    "58104": ExchangeError,  # fiat purchase abnormality, cannot transfer
    "58105": ExchangeError,  # trading abnormality, cannot transfer
    "58106": ExchangeError,  # complete KYC before transfer
    "58107": ExchangeError,  # crypto purchase abnormality, cannot transfer
    "58110": ExchangeError,  # transfers suspended due to market risk
    "58111": ExchangeError,  # funds transfers unavailable while perpetual funding fees are transferred
    "58112": ExchangeError,  # transfer failed, contact support
    "58114": ExchangeError,  # transfer amount must be more than 0
    "58115": ExchangeError,  # sub-account does not exist
    "58116": ExchangeError,  # transfer amount exceeds the limit
    "58117": ExchangeError,  # account assets are abnormal, cannot transfer
    "58125": BadRequest,  # non-tradable assets can only be transferred from sub to main
    "58126": BadRequest,  # non-tradable assets can only be transferred between funding accounts
    "58127": BadRequest,  # main account API key does not support transfer type
    "58128": BadRequest,  # main account API key does not support transfer out
    "58200": ExchangeError,  # withdrawal from this account to this address is not supported
    "58201": ExchangeError,  # withdrawal amount exceeds the daily limit
    "58202": ExchangeError,  # minimum withdrawal amount for NEO is 1
    "58203": BadRequest,  # add a withdrawal address
    "58204": AccountSuspended,  # withdrawal suspended
    "58205": ExchangeError,  # withdrawal amount exceeds the upper limit
    "58206": ExchangeError,  # withdrawal amount is less than the lower limit
    "58207": BadRequest,  # withdrawal failed due to address error
    "58208": ExchangeError,  # withdrawal failed, email not bound
    "58209": ExchangeError,  # withdrawal failed, name not set
    "58210": ExchangeError,  # withdrawal failed, phone not bound
    "58211": ExchangeError,  # withdrawal fee is too high or too low
    "58212": ExchangeError,  # withdrawal fee should be percentage of the amount
    "58213": AuthenticationError,  # trade password not set
    "58221": BadRequest,  # missing label of withdrawal address
    "58222": BadRequest,  # illegal withdrawal address
    "58224": BadRequest,  # type of coin not supported for on-chain withdrawals
    "58227": BadRequest,  # withdrawal of non-tradable assets can be withdrawn all at once
    "58228": BadRequest,  # withdrawal of non-tradable assets requires that the API key be a main account
    "58229": InsufficientFunds,  # insufficient funding account balance to pay fees
    "58300": ExchangeError,  # deposit-address count exceeds the limit
    "58350": InsufficientFunds,  # insufficient balance
    # Account
    "59000": ExchangeError,  # settings failed, close open positions or orders first
    "59001": ExchangeError,  # switching unavailable with borrowings
    "59100": ExchangeError,  # you have open positions, cancel all before changing leverage
    "59101": ExchangeError,  # cancel all orders before changing leverage
    "59102": ExchangeError,  # leverage too high
    "59103": InsufficientFunds,  # leverage too low, insufficient margin
    "59104": ExchangeError,  # leverage too high, exceeds the max
    "59105": ExchangeError,  # leverage can not be less than 1
    "59106": ExchangeError,  # max position value for this leverage is exceeded
    "59107": ExchangeError,  # cancel all pending orders for the contract before changing leverage
    "59108": InsufficientFunds,  # low leverage and insufficient margin
    "59109": ExchangeError,  # account equity less than required margin after adjustment
    "59110": ExchangeError,  # instrument type does not support tgtCcy
    "59111": ExchangeError,  # leverage query not supported under portfolio margin
    "59112": ExchangeError,  # isolated/cross margin of instruments under liquidation
    "59128": InvalidOrder,  # lead trader leverage must be less than the max
    "59200": InsufficientFunds,  # insufficient account balance
    "59201": InsufficientFunds,  # negative account balance
    "59216": BadRequest,  # position does not exist
    "59260": PermissionDenied,  # spot margin trading not enabled
    "59262": PermissionDenied,  # futures trading not enabled
    "59300": ExchangeError,  # margin call failed, position does not exist
    "59301": ExchangeError,  # margin adjustment exceeds the max limit
    "59313": ExchangeError,  # unable to repay, no liabilities
    "59401": ExchangeError,  # holdings already reached the limit
    "59500": ExchangeError,  # only the main account has permission
    "59501": ExchangeError,  # max 50 API keys per account
    "59502": ExchangeError,  # note name already in use
    "59503": ExchangeError,  # each API key can bind up to 20 IPs
    "59504": ExchangeError,  # sub-account does not support withdrawal
    "59505": ExchangeError,  # passphrase format is incorrect
    "59506": ExchangeError,  # API key does not exist
    "59507": ExchangeError,  # the two accounts are the same
    "59508": AccountSuspended,  # sub-account is suspended
    "59515": ExchangeError,  # KYC required for sub-account creation
    # WebSocket error codes, occasionally surfaced through REST gateways
    "60001": AuthenticationError,  # OK-ACCESS-KEY can not be empty
    "60002": AuthenticationError,  # OK-ACCESS-SIGN can not be empty
    "60003": AuthenticationError,  # OK-ACCESS-PASSPHRASE can not be empty
    "60004": AuthenticationError,  # invalid OK-ACCESS-TIMESTAMP
    "60005": AuthenticationError,  # invalid OK-ACCESS-KEY
    "60006": InvalidNonce,  # timestamp request expired
    "60007": AuthenticationError,  # invalid sign
    "60008": AuthenticationError,  # login not supported for public channels
    "60009": AuthenticationError,  # login failed
    "60010": AuthenticationError,  # already logged in
    "60011": AuthenticationError,  # please log in
    "60012": BadRequest,  # illegal request
    "60013": BadRequest,  # invalid args
    "60014": RateLimitExceeded,  # requests too frequent
    "60015": NetworkError,  # connection closed as there was no data transmission
    "60016": ExchangeNotAvailable,  # buffer is full, cannot write data
    "60017": BadRequest,  # invalid url path
    "60018": BadRequest,  # channel does not exist
    "60019": BadRequest,  # invalid op
    "60020": ExchangeError,  # API key does not exist
    "60021": AccountNotEnabled,  # account has no trading permission
    "60022": AuthenticationError,  # bulk login partially succeeded
    "60023": RateLimitExceeded,  # bulk login requests too frequent
    "60024": AuthenticationError,  # wrong passphrase
    "60025": ExchangeError,  # token subscription count exceeds the limit
    "60026": AuthenticationError,  # batch login by API key and token simultaneously is not supported
    "60027": BadRequest,  # parameter can not be empty
    "60028": NotSupported,  # feature not supported by this endpoint
    "60029": AccountNotEnabled,  # only users on the VIP5 tier and above can subscribe
    "60030": AccountNotEnabled,  # only users on the VIP4 tier and above can subscribe
    "60031": AuthenticationError,  # WebSocket endpoint does not support multiple logins
    "60032": AuthenticationError,  # API key does not exist
    "63999": ExchangeError,  # internal system error
    "64000": BadRequest,  # subscription parameter uly is unavailable
    "64001": BadRequest,  # channel changed for this instrument
    "64002": BadRequest,  # channel does not support current instrument
    "64003": AccountNotEnabled,  # current user tier cannot subscribe
    "64004": BadRequest,  # instrument not supported for this channel
    "64007": BadRequest,  # invalid subscription param
    "64008": ExchangeNotAvailable,  # connection will soon be closed for service upgrade
    # Copy trading
    "70010": BadRequest,  # timestamp parameters need to be in Unix timestamp format
    "70013": BadRequest,  # endTs needs to be bigger than or equal to beginTs
    "70016": BadRequest,  # specify the instrument type
}

_BROAD: Dict[str, Type[OkxError]] = {
    "Internal Server Error": ExchangeNotAvailable,
    "server error": ExchangeNotAvailable,
    "Service temporarily unavailable": OnMaintenance,
    "System maintenance": OnMaintenance,
    "Too Many Requests": RateLimitExceeded,
    "Request timeout": RequestTimeout,
    "Insufficient balance": InsufficientFunds,
    "Invalid Sign": AuthenticationError,
    "Instrument ID does not exist": BadSymbol,
    "Order does not exist": OrderNotFound,
}

EXACT_ERRORS: Mapping[str, Type[OkxError]] = MappingProxyType(_EXACT)
BROAD_ERRORS: Mapping[str, Type[OkxError]] = MappingProxyType(_BROAD)
